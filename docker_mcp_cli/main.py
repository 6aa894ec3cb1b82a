#!/usr/bin/env python3
"""
docker-mcp demo CLI - Main entry point
"""
import click

from docker_mcp.config import ConnectorConfig
from docker_mcp.connector.connector import DockerMcpConnector
from docker_mcp.docker_client.client import DockerApiClient
from docker_mcp.utils.exceptions import ConfigurationException
from docker_mcp.utils.logger import setup_logger_from_config, setup_logger
from docker_mcp_cli.commands.example import ExampleCommand, LifecycleCommand
from docker_mcp_cli.commands.interface import InterfaceCommand


pass_config = click.make_pass_decorator(dict, ensure=True)


@click.group()
@click.option('--config', 'config_path', help='YAML configuration file')
@click.option('--socket', 'socket_path', help='Docker Unix socket path')
@click.option('--host', help='Docker daemon hostname (TCP)')
@click.option('--port', type=int, help='Docker daemon port (TCP)')
@click.option('--tcp', is_flag=True, help='Use TCP instead of the Unix socket')
@click.option('--log-level', help='Logging level')
@click.pass_context
def cli(ctx, config_path, socket_path, host, port, tcp, log_level):
    """docker-mcp - Docker Engine API client demos"""
    ctx.ensure_object(dict)

    config = ConnectorConfig(config_path)
    if log_level:
        setup_logger(
            log_level=log_level,
            log_file=config.log_file,
            max_bytes=config.log_max_size,
            backup_count=config.log_backup_count
        )
    else:
        setup_logger_from_config(config)

    settings = config.connection_settings(
        socket_path=socket_path,
        host=host,
        port=port,
        use_socket=False if tcp else None
    )

    ctx.obj['config'] = config
    ctx.obj['settings'] = settings
    ctx.obj.setdefault('client_factory', DockerApiClient)
    ctx.obj.setdefault('connector_factory', DockerMcpConnector.from_config)


def _client(ctx):
    try:
        return ctx['client_factory'](ctx['settings'])
    except ConfigurationException as e:
        raise click.ClickException(str(e))


@cli.command()
@pass_config
def example(ctx):
    """Show version, containers, images and system info"""
    with _client(ctx) as client:
        ExampleCommand(client).run()


@cli.command()
@pass_config
def lifecycle(ctx):
    """Create, start, stop and remove an nginx container"""
    with _client(ctx) as client:
        LifecycleCommand(client).run()


@cli.command()
@pass_config
def interface(ctx):
    """Connect and keep checking the connection until Ctrl+C"""
    try:
        connector = ctx['connector_factory'](ctx['config'], settings=ctx['settings'])
    except ConfigurationException as e:
        raise click.ClickException(str(e))
    InterfaceCommand(connector).run()


if __name__ == '__main__':
    cli()
