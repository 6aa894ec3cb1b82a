"""
Base command class for the docker-mcp demo CLI
"""
import sys
import click


class BaseCommand:
    """Base class for all demo commands"""

    separator = '-' * 19

    def __init__(self, client):
        """Initialize command

        Args:
            client: DockerApiClient instance
        """
        self.client = client

    def rule(self):
        click.echo(self.separator)

    def report_error(self, action: str, error):
        """Report a failed step and carry on with the next one"""
        click.echo(f"Error {action}: {error}", err=True)

    def handle_error(self, error, exit_code: int = 1):
        """Report a fatal error and exit

        Args:
            error: Error object or message
            exit_code: Exit code
        """
        click.echo(f"Error: {error}", err=True)
        sys.exit(exit_code)
