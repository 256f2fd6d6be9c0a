"""Main module entrypoint for local runtime execution.

This module validates startup configuration and launches the web service.
"""

import argparse

import uvicorn

from hellosite.bootstrap import STARTUP_FATAL_ERRORS, bootstrap_create_application
from hellosite.config import DEFAULT_ENV_FILE_PATH
from hellosite.log import log_configure, log_get_logger
from hellosite.templating import TemplateRegistry

logger = log_get_logger(__name__)


def main_build_argument_parser() -> argparse.ArgumentParser:
    argument_parser = argparse.ArgumentParser(description="hellosite runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="serve",
        choices=("serve", "templates"),
        help="Runtime command: `serve` starts the server, `templates` lists the registered template names",
        type=str,
    )
    argument_parser.add_argument(
        "--env-file",
        dest="env_file",
        default=DEFAULT_ENV_FILE_PATH,
        type=str,
        help="Fallback KEY=VALUE configuration file consulted for keys missing from the environment",
    )
    argument_parser.add_argument(
        "--export-env",
        dest="export_env",
        action="store_true",
        help="Copy fallback-only configuration values into the process environment",
    )
    return argument_parser


def main(argv: list[str] | None = None) -> None:
    """Run the selected runtime command.

    Args:
        argv: Command-line arguments; defaults to ``sys.argv[1:]``.

    Raises:
        SystemExit: Raised with status 1 when startup fails.
    """

    parsed_arguments = main_build_argument_parser().parse_args(argv)
    log_configure()

    try:
        if parsed_arguments.command == "templates":
            for name in TemplateRegistry.template_build().template_names():
                print(name)
            return

        bootstrap_result = bootstrap_create_application(
            env_file_path=parsed_arguments.env_file,
            export_environment=parsed_arguments.export_env,
        )
    except STARTUP_FATAL_ERRORS as error:
        logger.critical("Startup failed: %s", error)
        raise SystemExit(1) from error

    settings = bootstrap_result.settings
    logger.info("Running on port %s", settings.application_port)
    uvicorn.run(
        bootstrap_result.application,
        host=settings.application_host,
        port=settings.application_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
