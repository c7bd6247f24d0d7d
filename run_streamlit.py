"""
Launcher for the YouTube Video Analyzer page.

The page talks to the API server started by run_api.py; its address reaches
the page through the API_URL environment variable.
"""

import os
import argparse
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Mapping

import requests
from dotenv import load_dotenv

from video_analyzer.config import config

PROJECT_DIR = Path(__file__).parent.absolute()
APP_PATH = PROJECT_DIR / "video_analyzer" / "frontend" / "streamlit_app.py"


def build_command(port: int) -> List[str]:
    """Get the streamlit command line for the page."""
    return [
        "streamlit", "run", str(APP_PATH),
        "--server.port", str(port),
        "--server.headless", "true",
        "--browser.gatherUsageStats", "false",
    ]


def build_env(api_url: str, base_env: Mapping[str, str]) -> Dict[str, str]:
    """
    Get the environment for the page process.

    Args:
        api_url: Base URL of the API server
        base_env: Environment to extend

    Returns:
        A copy of base_env with API_URL set and the project importable
    """
    env = dict(base_env)
    env["API_URL"] = api_url
    # streamlit runs the page as a script, so the package must be on the path
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(PROJECT_DIR), base_env.get("PYTHONPATH")]))
    return env


def api_reachable(api_url: str) -> bool:
    """Check whether the API server answers on its root route."""
    try:
        return requests.get(api_url, timeout=2).ok
    except requests.RequestException:
        return False


def main():
    """Launch the Streamlit page."""
    load_dotenv()

    parser = argparse.ArgumentParser(description="YouTube Video Analyzer Streamlit App")
    parser.add_argument("--port", type=int, default=8501, help="Port to run Streamlit on")
    parser.add_argument("--api-url", default=config.API_URL, help=f"URL of the API server (default: {config.API_URL})")
    args = parser.parse_args()

    print(f"Starting {config.APP_NAME} page on port {args.port}")
    print(f"API server: {args.api_url}")
    if not api_reachable(args.api_url):
        print(f"WARNING: no API server answering at {args.api_url}; start it with run_api.py")

    try:
        subprocess.run(build_command(args.port), env=build_env(args.api_url, os.environ), check=True)
    except KeyboardInterrupt:
        print("Streamlit app stopped")
    except subprocess.CalledProcessError as e:
        print(f"Error running Streamlit app: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
