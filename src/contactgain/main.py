"""Application entry point for ContactGain backend server."""

from contactgain.app import App
from contactgain.config import Config
from contactgain.logging import setup_logging
from contactgain.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
