import json
import logging
import sys

import click
from termcolor import colored

from explorer_api.api import create_and_run_app
from explorer_api.config import load_config, CONFIG_ENV
from explorer_api.gateways import RpcGateway
from explorer_api.helpers import configure_logging, redact_url
from explorer_api.interactors import ApiError, BlockResolver, TransactionResolver, \
    LatestBlocksAggregator

LOG = logging.getLogger(__name__)


def _print_result(lookup):
    try:
        result = lookup()
    except ApiError as e:
        click.echo(e.message, err=True)
        sys.exit(1)

    click.echo(json.dumps(result, indent=2, sort_keys=True))


@click.group()
@click.option('--config', 'config_path', envvar=CONFIG_ENV, default=None,
              help='Path to the INI config file')
@click.pass_context
def cli(ctx, config_path):
    config = load_config(config_path)
    configure_logging(config)
    ctx.obj = config


@cli.command()
@click.option('--host', default=None, help='Bind host, overrides [server] host')
@click.option('--port', default=None, type=int, help='Bind port, overrides [server] port')
@click.pass_obj
def serve(config, host, port):
    LOG.warning(colored("Starting Bitcoin Explorer API, node at %s" % redact_url(config.get('rpc', 'url')), "green"))
    create_and_run_app(config, host=host, port=port)


@cli.command()
@click.argument('block_hash')
@click.pass_obj
def block(config, block_hash):
    resolver = BlockResolver(RpcGateway.from_config(config))
    _print_result(lambda: resolver.resolve(block_hash))


@cli.command()
@click.argument('txid')
@click.pass_obj
def tx(config, txid):
    resolver = TransactionResolver(RpcGateway.from_config(config))
    _print_result(lambda: resolver.resolve(txid))


@cli.command()
@click.pass_obj
def latest(config):
    aggregator = LatestBlocksAggregator(
        RpcGateway.from_config(config),
        workers=config.getint('explorer', 'fetch_workers')
    )
    _print_result(aggregator.list)


if __name__ == "__main__":
    cli()
