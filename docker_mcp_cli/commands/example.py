"""
Fixed-sequence API walkthroughs for the docker-mcp demo CLI
"""
import time

import click

from docker_mcp.docker_client.utils import short_id
from docker_mcp.utils.exceptions import APIException, DockerMcpException
from docker_mcp_cli.commands.base import BaseCommand
from docker_mcp_cli.formatters.table import format_table
from docker_mcp_cli.formatters.utils import container_name, format_size

EXAMPLE_IMAGE = 'nginx'
EXAMPLE_TAG = 'latest'
EXAMPLE_CONTAINER = 'docker-mcp-nginx-example'


class ExampleCommand(BaseCommand):
    """Read-only tour of the API: version, containers, images, system info"""

    def run(self):
        click.echo('DOCKER API EXAMPLES')
        self.rule()
        for step in (self.show_version, self.list_running_containers,
                     self.list_images, self.show_system_info):
            step()
            self.rule()

    def show_version(self):
        try:
            version = self.client.get_version()
        except DockerMcpException as e:
            self.report_error('getting Docker version', e)
            return
        click.echo('Docker Version:')
        click.echo(f"- Engine: {version.get('Version')}")
        click.echo(f"- API: {version.get('ApiVersion')} (min {version.get('MinAPIVersion', '-')})")
        click.echo(f"- OS/Arch: {version.get('Os')}/{version.get('Arch')}")

    def list_running_containers(self):
        try:
            containers = self.client.list_containers()
        except DockerMcpException as e:
            self.report_error('listing containers', e)
            return
        click.echo(f"Running Containers: {len(containers)}")
        rows = [
            [short_id(c['Id']), c.get('Image', ''), c.get('Status', ''), container_name(c)]
            for c in containers
        ]
        table = format_table(['CONTAINER ID', 'IMAGE', 'STATUS', 'NAME'], rows)
        if table:
            click.echo(table)

    def list_images(self):
        try:
            images = self.client.list_images()
        except DockerMcpException as e:
            self.report_error('listing images', e)
            return
        click.echo(f"Available Images: {len(images)}")
        rows = [
            [short_id(image['Id']),
             ', '.join(image.get('RepoTags') or ['<none>:<none>']),
             format_size(image.get('Size'))]
            for image in images
        ]
        table = format_table(['IMAGE ID', 'TAGS', 'SIZE'], rows)
        if table:
            click.echo(table)

    def show_system_info(self):
        try:
            info = self.client.get_system_info()
        except DockerMcpException as e:
            self.report_error('getting system info', e)
            return
        click.echo('Docker System Info:')
        click.echo(
            f"- Containers: {info.get('Containers')} (running: {info.get('ContainersRunning')}, "
            f"paused: {info.get('ContainersPaused')}, stopped: {info.get('ContainersStopped')})"
        )
        click.echo(f"- Images: {info.get('Images')}")
        click.echo(f"- Docker Root Dir: {info.get('DockerRootDir')}")
        click.echo(f"- Operating System: {info.get('OperatingSystem')}")


class LifecycleCommand(BaseCommand):
    """Create, start, stop and remove an nginx container"""

    def __init__(self, client, hold_seconds: float = 10):
        super().__init__(client)
        self.hold_seconds = hold_seconds

    def run(self):
        click.echo('DOCKER CONTAINER LIFECYCLE')
        self.rule()
        container_id = self.create_and_start()
        self.rule()
        if not container_id:
            self.handle_error('container was not started')

        click.echo(f"Waiting {self.hold_seconds:g} seconds before stopping container...")
        time.sleep(self.hold_seconds)
        self.stop_and_remove(container_id)
        self.rule()

    def _create(self):
        return self.client.create_container({
            'Image': f"{EXAMPLE_IMAGE}:{EXAMPLE_TAG}",
            'ExposedPorts': {'80/tcp': {}},
            'HostConfig': {
                'PortBindings': {'80/tcp': [{'HostPort': '8080'}]}
            }
        }, EXAMPLE_CONTAINER)

    def create_and_start(self):
        """Returns the container ID, or None if a step failed"""
        try:
            try:
                container = self._create()
            except APIException as e:
                if e.status_code != 404:
                    raise
                click.echo(f"Image {EXAMPLE_IMAGE}:{EXAMPLE_TAG} not found locally, pulling...")
                self.client.pull_image(EXAMPLE_IMAGE, EXAMPLE_TAG)
                container = self._create()

            container_id = container['Id']
            click.echo(f"Container created with ID: {container_id}")
            for warning in container.get('Warnings') or []:
                click.echo(f"Warning: {warning}", err=True)

            self.client.start_container(container_id)
            click.echo(f"Container {short_id(container_id)} started successfully")
            return container_id
        except DockerMcpException as e:
            self.report_error('creating/starting container', e)
            return None

    def stop_and_remove(self, container_id: str) -> bool:
        try:
            self.client.stop_container(container_id)
            click.echo(f"Container {short_id(container_id)} stopped successfully")

            self.client.remove_container(container_id)
            click.echo(f"Container {short_id(container_id)} removed successfully")
            return True
        except DockerMcpException as e:
            self.report_error('stopping/removing container', e)
            return False
