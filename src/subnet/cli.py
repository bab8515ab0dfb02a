"""
Subnet CLI commands.
"""

import click
from rich.console import Console
from rich.table import Table

from subnet.config import get_config
from subnet.core import (
    CIDROperations,
    SubnetInfo,
    calculate_subnet,
    get_address_info,
    parse,
    split_cidr,
    subnet_cidr,
    summarize_cidrs,
    supernet_cidr,
)
from subnet.errors import SubnetError
from subnet.ipv6 import IPv6
from subnet.logging_config import configure_logging

# Longest list printed before the rest is elided
MAX_LISTED = 256

FLAG_STYLES = [
    ("is_private", "[yellow]Private[/yellow]"),
    ("is_loopback", "[blue]Loopback[/blue]"),
    ("is_multicast", "[magenta]Multicast[/magenta]"),
    ("is_link_local", "[cyan]Link-Local[/cyan]"),
]


def _fail(console: Console, error: Exception) -> None:
    console.print(f"[red]Error:[/red] {error}")
    raise SystemExit(1)


def _property_table(title: str) -> Table:
    table = Table(title=title, show_header=False, box=None)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")
    return table


def _add_subnet_rows(table: Table, subnet: SubnetInfo) -> None:
    rows = [
        ("Network", subnet.network),
        ("Broadcast", subnet.broadcast),
        ("Netmask", subnet.netmask),
        ("Hostmask", subnet.hostmask),
        ("Prefix Length", f"/{subnet.prefix_length}"),
        ("Total Addresses", f"{subnet.num_addresses:,}"),
        ("Usable Hosts", f"{subnet.num_hosts:,}"),
    ]
    if subnet.first_host:
        rows.append(("First Host", subnet.first_host))
        rows.append(("Last Host", subnet.last_host))
    for name, value in rows:
        table.add_row(name, value)


def _print_networks(console: Console, networks: list[str]) -> None:
    if len(networks) > MAX_LISTED:
        console.print(f"[yellow]Showing first {MAX_LISTED} subnets...[/yellow]\n")
        for net in networks[:MAX_LISTED]:
            console.print(net)
        console.print(f"\n[dim]... and {len(networks) - MAX_LISTED:,} more[/dim]")
    else:
        for net in networks:
            console.print(net)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Also log to this file")
def cli(debug: bool, log_file: str | None):
    """IPv4/IPv6 subnet calculator."""
    configure_logging(debug=debug, level=get_config().log_level, log_file=log_file)


@cli.command()
@click.argument("address")
def info(address: str):
    """Show details and flags for an address or CIDR.

    Examples:
        subnet info 8.8.8.8
        subnet info 192.168.1.0/24
        subnet info 2001:db8::1/64
    """
    console = Console()

    try:
        ip_info = get_address_info(address)
    except SubnetError as e:
        _fail(console, e)

    table = _property_table(f"IP Information: {address}")
    table.add_row("Address", ip_info.address)
    table.add_row("Version", f"IPv{ip_info.version}")
    table.add_row("Reverse DNS", ip_info.reverse_dns)

    flags = [style for attr, style in FLAG_STYLES if getattr(ip_info, attr)]
    table.add_row("Flags", " ".join(flags) if flags else "[green]None[/green]")

    if ip_info.subnet:
        table.add_row("", "")
        _add_subnet_rows(table, ip_info.subnet)

    console.print(table)


@cli.command()
@click.argument("cidr")
def calc(cidr: str):
    """Calculate subnet information from CIDR notation.

    Examples:
        subnet calc 10.0.0.0/8
        subnet calc 192.168.1.0/255.255.255.0
        subnet calc 2001:db8::/32
    """
    console = Console()

    try:
        subnet = calculate_subnet(cidr)
    except SubnetError as e:
        _fail(console, e)

    table = _property_table(f"Subnet Calculator: {cidr}")
    _add_subnet_rows(table, subnet)
    console.print(table)


@cli.command()
@click.argument("cidr")
@click.argument("new_prefix")
def subnet(cidr: str, new_prefix: str):
    """Divide a CIDR into equal subnets of a longer prefix.

    Examples:
        subnet subnet 10.0.0.0/8 /16
        subnet subnet 192.168.0.0/24 28
    """
    console = Console()

    try:
        subnets = subnet_cidr(cidr, int(new_prefix.lstrip("/")))
    except ValueError as e:
        _fail(console, e)

    console.print(f"[cyan]Splitting {cidr} into /{new_prefix.lstrip('/')} subnets:[/cyan]")
    console.print(f"[dim]Total subnets: {len(subnets):,}[/dim]\n")
    _print_networks(console, subnets)


@cli.command()
@click.argument("cidr")
@click.argument("count", type=int)
def split(cidr: str, count: int):
    """Split a CIDR into exactly COUNT contiguous subnets.

    Examples:
        subnet split 172.16.10.0/24 3
    """
    console = Console()

    try:
        subnets = split_cidr(cidr, count)
    except SubnetError as e:
        _fail(console, e)

    console.print(f"[cyan]Splitting {cidr} into {count} subnets:[/cyan]\n")
    _print_networks(console, subnets)


@cli.command()
@click.argument("cidr")
@click.argument("new_prefix")
def supernet(cidr: str, new_prefix: str):
    """Widen a CIDR to a shorter prefix.

    Examples:
        subnet supernet 172.16.10.0/24 22
    """
    console = Console()

    try:
        result = supernet_cidr(cidr, int(new_prefix.lstrip("/")))
    except ValueError as e:
        _fail(console, e)

    console.print(result)


@cli.command()
@click.argument("cidrs", nargs=-1, required=True)
def summarize(cidrs: tuple[str, ...]):
    """Summarize/aggregate multiple CIDRs into minimum set.

    Examples:
        subnet summarize 172.16.10.1/24 172.16.11.2/24
        subnet summarize 10.0.1.0/24 10.0.2.0/24 10.0.3.0/24 10.0.4.0/24
    """
    console = Console()

    try:
        result = summarize_cidrs(list(cidrs))
    except SubnetError as e:
        _fail(console, e)

    console.print(f"[cyan]Input CIDRs:[/cyan] {len(cidrs)}")
    console.print(f"[cyan]Summarized:[/cyan] {len(result)}\n")

    for cidr in result:
        console.print(cidr)


@cli.command()
@click.argument("cidr")
@click.argument("address")
def contains(cidr: str, address: str):
    """Check if a CIDR contains an IP address or subnet.

    Examples:
        subnet contains 10.0.0.0/8 10.1.2.3
        subnet contains 192.168.0.0/16 192.168.1.0/24
    """
    console = Console()

    try:
        result = CIDROperations.contains(cidr, address)
    except SubnetError as e:
        _fail(console, e)

    if result:
        console.print(f"[green]Yes[/green] - {address} is within {cidr}")
    else:
        console.print(f"[red]No[/red] - {address} is not within {cidr}")


@cli.command()
@click.argument("address")
def expand(address: str):
    """Print an IPv6 address with every group in full.

    Examples:
        subnet expand 2001:db8:0:cd30::
    """
    console = Console()

    try:
        result = IPv6.expand(address)
    except SubnetError as e:
        _fail(console, e)

    console.print(result)


@cli.command()
@click.argument("address")
def compress(address: str):
    """Print the shortest form of an IPv6 address.

    Examples:
        subnet compress 2001:0db8:0000:cd30:0000:0000:0000:0000
    """
    console = Console()

    try:
        result = IPv6.compress(address)
    except SubnetError as e:
        _fail(console, e)

    console.print(result)


@cli.command()
@click.argument("address")
def reverse(address: str):
    """Print the in-addr.arpa / ip6.arpa name of an address.

    Examples:
        subnet reverse 172.16.10.1
        subnet reverse 3ffe:505:2::f
    """
    console = Console()

    try:
        result = parse(address).reverse_dns
    except SubnetError as e:
        _fail(console, e)

    console.print(result)


def main():
    cli()
