#!/usr/bin/env python3
"""
Places Proxy Backend - Run Script
This script starts the FastAPI backend server
"""

import os
import sys
import subprocess
from importlib.util import find_spec
from pathlib import Path

def print_colored(message, color="blue"):
    """Print colored output"""
    colors = {
        "red": "\033[91m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "blue": "\033[94m",
        "reset": "\033[0m"
    }
    print(f"{colors.get(color, '')}{message}{colors['reset']}")

def check_file_exists(filepath, error_message):
    """Check if a file exists"""
    if not Path(filepath).exists():
        print_colored(f"❌ Error: {error_message}", "red")
        sys.exit(1)

def has_api_key():
    """The key may come from the environment or from a .env file."""
    if os.environ.get("GOOGLE_MAPS_API_KEY"):
        return True
    for env_path in (Path(".env"), Path("../.env")):
        if env_path.exists() and "GOOGLE_MAPS_API_KEY=" in env_path.read_text(encoding="utf-8"):
            return True
    return False

def main():
    print_colored("🚀 Starting Places Proxy Backend...", "blue")

    # Check if we're in the backend directory
    check_file_exists("places_proxy/main.py", "places_proxy/main.py not found. Please run this script from the backend directory.")

    # The proxy answers 500 on every search until the key is set
    if not has_api_key():
        print_colored("⚠️  Warning: GOOGLE_MAPS_API_KEY is not set.", "yellow")
        print("Create a .env file in the project root with:")
        print("  GOOGLE_MAPS_API_KEY=your_api_key_here")
        print("  ENVIRONMENT=development")
        print("  LOGGER=20")
        print()
        response = input("Continue anyway? (y/N): ").strip().lower()
        if response != 'y':
            sys.exit(1)

    # The package and its server must be installed (pip install -e . from the project root)
    print_colored("🔍 Checking dependencies...", "blue")
    missing = [name for name in ("fastapi", "uvicorn", "httpx", "pydantic_settings") if find_spec(name) is None]
    if missing:
        print_colored(f"❌ Missing modules: {', '.join(missing)}", "red")
        print("Install the project from the repository root first:")
        print("  pip install -e .")
        sys.exit(1)

    # Start the server
    print_colored("✅ All checks passed!", "green")
    print_colored("🌐 Starting Uvicorn server...", "blue")
    print("📍 Backend will be available at: http://localhost:8000")
    print("📍 API Health check: http://localhost:8000/health")
    print("📍 Places proxy: http://localhost:8000/placesProxy?lat=5.6037&lng=-0.1870&radius=3000")
    print("📍 API Documentation: http://localhost:8000/docs")
    print()
    print("Press Ctrl+C to stop the server")
    print()

    # Run uvicorn with auto-reload for development
    try:
        subprocess.run([
            sys.executable, "-m", "uvicorn",
            "places_proxy.main:app",
            "--reload",
            "--host", "0.0.0.0",
            "--port", "8000"
        ], check=True)
    except KeyboardInterrupt:
        print_colored("\n👋 Backend server stopped.", "yellow")
    except subprocess.CalledProcessError as e:
        print_colored(f"\n❌ Error starting server: {e}", "red")
        sys.exit(1)

if __name__ == "__main__":
    main()
