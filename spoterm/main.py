import click
from spoterm.modules.notifier.commands import create_notifier_commands
from spoterm.modules.logging import create_logger, BaseLogger


class SpotermContext:
    """Context object to store CLI state."""
    def __init__(self):
        self.logger: BaseLogger = None

pass_context = click.make_pass_decorator(SpotermContext, ensure=True)

@click.group()
@click.option('--output', '-o',
              type=click.Choice(['colorful', 'plain', 'json']),
              default='colorful',
              help='Output format (colorful for CLI, plain for CI/file, json for machine parsing)',
              envvar='SPOTERM_OUTPUT')
@click.option('--log-level', '-l',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
              default='INFO',
              help='Set the logging level',
              envvar='SPOTERM_LOG_LEVEL')
@pass_context
def cli(ctx, output, log_level):
    """spoterm: advance notice of EC2 spot instance termination."""
    ctx.logger = create_logger(output, log_level)

for command in create_notifier_commands():
    cli.add_command(command)

def main():
    cli()

if __name__ == '__main__':
    main()
