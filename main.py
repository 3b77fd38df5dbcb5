import typer


app = typer.Typer(add_completion=False)


@app.command()
def main(
    push_commands: bool = typer.Option(
        False,
        '--push-commands',
        '-p',
        '-pc',
        help='overwrite the registered application commands on startup'
    ),
    host: str = typer.Option('0.0.0.0', '--host', help='address to bind'),
    port: int = typer.Option(8080, '--port', help='port to bind'),
) -> None:
    from uvicorn import run

    from slashgate.core import AppContext, configure_logging, create_app
    from slashgate.commands import register
    from slashgate.env import Env

    env = Env.new()
    configure_logging(env)

    context = AppContext.new(env, push_commands=push_commands)
    register(context)

    run(
        create_app(context),
        host=host,
        port=port,
        loop='uvloop',
        forwarded_allow_ips='*'
    )


if __name__ == '__main__':
    app()
