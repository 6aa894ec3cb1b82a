"""
Connector-driven session for the docker-mcp demo CLI
"""
import json
import sys
import time

import click

from docker_mcp.docker_client.utils import format_ports, short_id
from docker_mcp.utils.exceptions import DockerMcpException
from docker_mcp_cli.commands.base import BaseCommand
from docker_mcp_cli.formatters.utils import container_name, format_created, platform_name


class InterfaceCommand(BaseCommand):
    """Connect, report on the daemon, then watch the connection until Ctrl+C"""

    def __init__(self, connector, check_interval: float = 30):
        """Initialize command

        Args:
            connector: DockerMcpConnector instance
            check_interval: Seconds between liveness checks
        """
        super().__init__(None)
        self.connector = connector
        self.check_interval = check_interval

    def run(self):
        click.echo('DOCKER MCP INTERFACE')
        click.echo('-' * 20)

        if not self.connector.connect():
            self.connector.cancel_reconnect()
            self.handle_error('Failed to establish Docker MCP connection')

        info = self.connector.get_connection_info()
        click.echo(f"Connected to {describe_connection(info)}")
        click.echo('\nDocker MCP Connection Information:')
        click.echo(json.dumps(info.to_dict(), indent=2))

        try:
            self.client = self.connector.get_client()
            self.show_system_info()
            self.show_running_containers()
        except DockerMcpException as e:
            self.connector.disconnect()
            self.handle_error(f"Error while interacting with Docker MCP: {e}")

        click.echo('\nConnection to Docker MCP is active.')
        click.echo('Press Ctrl+C to disconnect and exit.')
        self.watch()

    def show_system_info(self):
        info = self.client.get_system_info()
        click.echo('\nDocker System Information:')
        for label, key in (
            ('Containers', 'Containers'),
            ('Running', 'ContainersRunning'),
            ('Paused', 'ContainersPaused'),
            ('Stopped', 'ContainersStopped'),
            ('Images', 'Images'),
            ('Driver', 'Driver'),
            ('Operating System', 'OperatingSystem'),
            ('Architecture', 'Architecture'),
            ('Kernel Version', 'KernelVersion'),
        ):
            click.echo(f"- {label}: {info.get(key)}")

    def show_running_containers(self):
        containers = self.client.list_containers()
        click.echo('\nRunning Containers:')
        if not containers:
            click.echo('No containers currently running')
            return

        for index, container in enumerate(containers, start=1):
            click.echo(f"{index}. {container_name(container)} ({container.get('Image')})")
            click.echo(f"   ID: {short_id(container['Id'])}")
            click.echo(f"   Status: {container.get('Status')}")
            click.echo(f"   Ports: {format_ports(container.get('Ports'))}")
            click.echo(f"   Created: {format_created(container.get('Created'))}")

    def watch(self):
        """Check liveness every ``check_interval`` seconds until interrupted"""
        try:
            while True:
                time.sleep(self.check_interval)
                if self.connector.check_connection():
                    continue
                if self.connector.reconnect_pending:
                    click.echo('Connection lost, waiting for reconnect...', err=True)
                    continue
                self.connector.disconnect()
                self.handle_error('Connection to Docker MCP lost')
        except KeyboardInterrupt:
            click.echo('\nReceived exit signal. Disconnecting from Docker MCP...')
            self.connector.disconnect()
            sys.exit(0)


def describe_connection(info) -> str:
    """One-line summary of a ConnectionInfo"""
    return f"Docker Engine {info.version} (API {info.api_version}, {platform_name(info.platform)})"
