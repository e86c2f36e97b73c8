from dotenv import load_dotenv
from core.config import settings
from core.logging import get_module_logger
from server import server

load_dotenv()

server_app = server.handler
logger = get_module_logger()


def main():
    """Log startup output once the server is accepting requests."""
    logger.info(
        "application_startup",
        git_sha=settings.GIT_SHA,
        production=settings.is_production,
    )
    list_configs()


def list_configs():
    """List all configuration settings keys"""
    config_settings = {"settings": []}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)


server_app.add_event_handler("startup", main)
