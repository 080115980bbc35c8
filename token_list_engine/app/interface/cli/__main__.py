import asyncio
import inspect
import typer
import logging
from dotenv import load_dotenv
from InquirerPy import inquirer
from token_list_engine.app.config import settings
from token_list_engine.app.domain.chains import LINEA_MAINNET
from token_list_engine.app.interface.tasks import TASKS


load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

app = typer.Typer()
token_list_app = typer.Typer(help="cli for verifying and maintaining the bridged token list.")
app.add_typer(token_list_app, name="token-list")


@token_list_app.command("run")
def run() -> None:
    task_name = inquirer.select(
        message="Select task:",
        choices=list(TASKS.keys()),
        pointer="❯",
        instruction="Use ↑/↓ to move, Enter to select",
    ).execute()

    task = TASKS[task_name]

    kwargs: dict[str, object] = {}

    sig = inspect.signature(task)
    params = sig.parameters

    if "chain_id" in params:
        kwargs["chain_id"] = int(
            inquirer.text(
                message="Chain ID of the token (1 = Ethereum, 59144 = Linea):",
                default=str(LINEA_MAINNET.chain_id),
            ).execute()
        )
    if "address" in params:
        kwargs["address"] = inquirer.text(message="Token address:").execute().strip()
    if "root_address" in params:
        root_address = inquirer.text(
            message="Root token address on the other chain (empty = native token):",
            default="",
        ).execute()
        kwargs["root_address"] = root_address.strip() or None

    if "list_path" in params:
        default_path = (
            settings.token_short_list_path
            if task_name == "verify_token_list_task"
            else settings.token_full_list_path
        )
        kwargs["list_path"] = inquirer.text(
            message="Token list path:",
            default=default_path,
        ).execute()
    if "short_list_path" in params:
        kwargs["short_list_path"] = inquirer.text(
            message="Token shortlist path:",
            default=settings.token_short_list_path,
        ).execute()

    asyncio.run(task(**kwargs))


@token_list_app.command("verify")
def verify(
    list_path: str = typer.Option(None, help="Token list to verify (defaults to the shortlist)."),
) -> None:
    asyncio.run(TASKS["verify_token_list_task"](list_path=list_path))


@token_list_app.command("sync")
def sync(
    list_path: str = typer.Option(None, help="Full token list to update."),
    short_list_path: str = typer.Option(None, help="Curated shortlist to merge in."),
) -> None:
    asyncio.run(
        TASKS["sync_token_shortlist_task"](
            list_path=list_path,
            short_list_path=short_list_path,
        )
    )


@token_list_app.command("add")
def add(
    chain_id: int = typer.Argument(..., help="Chain where the token is deployed."),
    address: str = typer.Argument(..., help="Token address."),
    root_address: str = typer.Option(None, help="Counterpart address on the other chain."),
    list_path: str = typer.Option(None, help="Token list to update (defaults to the full list)."),
) -> None:
    asyncio.run(
        TASKS["add_token_task"](
            chain_id=chain_id,
            address=address,
            root_address=root_address,
            list_path=list_path,
        )
    )


if __name__ == "__main__":
    LOGO = r"""
     _     _                    _____     _                _     _     _
    | |   (_)_ __   ___  __ _  |_   _|__ | | _____ _ __   | |   (_)___| |_
    | |   | | '_ \ / _ \/ _` |   | |/ _ \| |/ / _ \ '_ \  | |   | / __| __|
    | |___| | | | |  __/ (_| |   | | (_) |   <  __/ | | | | |___| \__ \ |_
    |_____|_|_| |_|\___|\__,_|   |_|\___/|_|\_\___|_| |_| |_____|_|___/\__|

      --- Token List Engine CLI ---
    """
    typer.echo(LOGO)
    app()
