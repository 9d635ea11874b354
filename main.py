"""
Main entrypoint for the geocoding cache API.

Usage:
    Run directly (`python main.py`) to serve the API with uvicorn.
    Bind address comes from API_HOST / API_PORT, the upstream key from POSITIONSTACK_ACCESS_KEY.
"""
import os

import uvicorn

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))


def main():
    """
    Main function to run the API server.
    """
    try:
        uvicorn.run("src.api.app:app", host=API_HOST, port=API_PORT)
        return 0
    except Exception as e:
        print(f"An error occurred in the main function: {str(e)}")
        return 1


if __name__ == "__main__":
    exit_code = main()
    print(f"Exiting with code {exit_code}")
