# statusdog/config.py
# DESIGNER'S NOTE:
# All configuration lives here so that no backend URL is hardcoded in the handlers.
# Command-line flags win over environment variables (.env is loaded first), which win over defaults.

import argparse
import os

from dotenv import load_dotenv

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

DEFAULT_API_ORIGIN = "https://assign-back.vercel.app"
DEFAULT_IMAGE_BASE_URL = "https://http.dog"
DEFAULT_PLACEHOLDER_IMAGE = "https://via.placeholder.com/150"
AUTH_HEADER = "x-auth-token"


class AppConfig:
    """
    Parses command-line arguments and environment variables and constructs all backend endpoint URLs.
    """
    def __init__(self, argv=None):
        load_dotenv(dotenv_path=os.path.join(PROJECT_ROOT, ".env"))

        parser = argparse.ArgumentParser(description="StatusDog launcher")
        parser.add_argument(
            "--port",
            type=int,
            default=int(os.getenv("STATUSDOG_PORT", 10102)),
            help="Port to run the web UI on (default: 10102)"
        )
        parser.add_argument(
            "--api",
            type=str,
            default=os.getenv("STATUSDOG_API_ORIGIN", DEFAULT_API_ORIGIN),
            help=f"Origin of the list backend (default: {DEFAULT_API_ORIGIN})"
        )
        parser.add_argument(
            "--storage",
            type=str,
            default=os.getenv("STATUSDOG_STORAGE_PATH", os.path.join(PROJECT_ROOT, "data", "local_storage.json")),
            help="JSON file used as local storage"
        )

        # parse_known_args: Gradio's reload mode passes extra flags we don't own
        args, _ = parser.parse_known_args(argv)

        self.run_port = args.port
        self.STORAGE_PATH = args.storage
        self.LOG_DIR = os.getenv("STATUSDOG_LOG_DIR", os.path.join(PROJECT_ROOT, "logs"))
        self.LOG_LEVEL = os.getenv("STATUSDOG_LOG_LEVEL", "INFO").upper()

        self.ROOT_URL = args.api.rstrip("/")
        self.API_BASE_URL = f"{self.ROOT_URL}/api"

        # --- API Endpoints ---
        self.LOGIN_URL = f"{self.API_BASE_URL}/users/login"
        self.REGISTER_URL = f"{self.API_BASE_URL}/users/register"
        self.LISTS_URL = f"{self.API_BASE_URL}/lists"
        self.GET_LISTS_URL = f"{self.LISTS_URL}/getList"
        self.SAVE_LIST_URL = f"{self.LISTS_URL}/saveList"

        # --- Images ---
        self.IMAGE_BASE_URL = os.getenv("STATUSDOG_IMAGE_BASE_URL", DEFAULT_IMAGE_BASE_URL).rstrip("/")
        self.PLACEHOLDER_IMAGE = os.getenv("STATUSDOG_PLACEHOLDER_IMAGE", DEFAULT_PLACEHOLDER_IMAGE)

    def list_url(self, list_id: str) -> str:
        return f"{self.LISTS_URL}/{list_id}"

    def delete_item_url(self, list_id: str) -> str:
        return f"{self.LISTS_URL}/{list_id}/deleteItem"

    def image_url(self, code: str) -> str:
        return f"{self.IMAGE_BASE_URL}/{code}.jpg"
