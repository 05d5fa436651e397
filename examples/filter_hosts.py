"""
Zabbix API example

Connects to the API (verifying certificate and hostname by default), prints
the remote API version and a filtered host list with groups and macros.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from zbxapi import ZabbixApiError, ZabbixClient
from zbxapi.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def parse_args():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description="List filtered Zabbix hosts")
    parser.add_argument("--config", default="config.json", help="Config file path")
    parser.add_argument("--url", help="Zabbix frontend URL (overrides config)")
    parser.add_argument("--user", help="Zabbix user (overrides config)")
    parser.add_argument("--password", help="Zabbix password (overrides config)")
    parser.add_argument("--limit", type=int, default=5, help="Max number of hosts")
    parser.add_argument("--debug", action="store_true", help="Verbose tracing")
    return parser.parse_args()


def load_config(config_path: str) -> dict:
    """Load the 'zabbix' section of the config file, empty if missing"""
    config_file = Path(config_path)
    if not config_file.exists():
        return {}

    with open(config_file, "r", encoding="utf-8") as f:
        config = json.load(f)
    return config.get("zabbix", {})


def main():
    args = parse_args()
    setup_logging(debug=args.debug)
    console = Console()

    config = load_config(args.config)
    url = args.url or config.get("url")
    user = args.user or config.get("user")
    password = args.password or config.get("password")
    options = dict(config.get("options", {}))
    if args.debug:
        options["debug"] = True

    if not url or not user or password is None:
        console.print("[red]url, user and password are required[/red]")
        sys.exit(2)

    zbx = ZabbixClient()
    try:
        reused = zbx.login(url, user, password, options)
        logger.info(f"Logged in, reused session: {reused}")

        console.print(f"Remote Zabbix API Version: {zbx.get_api_version()}")

        params = {
            "output": ["hostid", "host", "name", "status", "maintenance_status", "description"],
            "filter": {"status": 0, "maintenance_status": 0, "type": 1},
            "selectGroups": ["groupid", "name"],
            "selectInterfaces": ["interfaceid", "main", "type", "useip", "ip", "dns", "port"],
            "selectInventory": ["os", "contact", "location"],
            "selectMacros": ["macro", "value"],
            "limit": args.limit,
        }
        hosts = zbx.call("host.get", params)

    except ZabbixApiError as e:
        console.print("[red]==== Exception ===[/red]")
        console.print(f"Errorcode: {e.code}")
        console.print(f"ErrorMessage: {e.message}")
        sys.exit(1)

    table = Table(title="Filtered hostlist with groups and macros")
    table.add_column("HostId", style="cyan")
    table.add_column("Host", style="magenta")
    table.add_column("Groups")
    table.add_column("Macros")

    for host in hosts:
        groups = ", ".join(g["name"] for g in host.get("groups", []))
        macros = ", ".join(f"{m['macro']}={m['value']}" for m in host.get("macros", []))
        table.add_row(str(host["hostid"]), host["host"], groups, macros)

    console.print(table)


if __name__ == "__main__":
    main()
