#!/usr/bin/env python3
"""
Development startup script.

Starts the mock commerce API and the storefront in development mode.
"""

import os
import sys
import subprocess
import time
from pathlib import Path

# Project root
PROJECT_ROOT = Path(__file__).parent.parent

MOCK_API_PORT = 8001
STOREFRONT_PORT = 8000


def check_dependencies():
    """Check if required dependencies are installed."""
    try:
        import fastapi
        import uvicorn
        import httpx
        import pydantic_settings
        print("✓ All core dependencies installed")
        return True
    except ImportError as e:
        print(f"✗ Missing dependency: {e.name}")
        print("\nRun: pip install -e .")
        return False


def check_env():
    """Check if .env file exists."""
    env_file = PROJECT_ROOT / ".env"

    if env_file.exists():
        print("✓ Configuration file found")
    else:
        print("! No .env file, using defaults")
    return True


def start_services():
    """Start both services in development mode."""
    processes = []
    env = {
        **os.environ,
        "API_BASE_URL": f"http://localhost:{MOCK_API_PORT}/api",
        "OAUTH_SUCCESS_URL": f"http://localhost:{STOREFRONT_PORT}/api/auth/google/success",
    }

    try:
        print(f"\n🏪 Starting Mock Commerce API on http://localhost:{MOCK_API_PORT} ...")
        api_process = subprocess.Popen(
            [
                sys.executable, "-m", "uvicorn",
                "mock_api.main:app",
                "--reload",
                "--host", "0.0.0.0",
                "--port", str(MOCK_API_PORT),
            ],
            cwd=PROJECT_ROOT,
            env=env,
        )
        processes.append(api_process)

        # Wait a bit for the API to start
        time.sleep(2)

        print(f"🛒 Starting Storefront on http://localhost:{STOREFRONT_PORT} ...")
        storefront_process = subprocess.Popen(
            [
                sys.executable, "-m", "uvicorn",
                "storefront.main:app",
                "--reload",
                "--host", "0.0.0.0",
                "--port", str(STOREFRONT_PORT),
            ],
            cwd=PROJECT_ROOT,
            env=env,
        )
        processes.append(storefront_process)

        print("\n" + "=" * 60)
        print("Services started successfully!")
        print("=" * 60)
        print(f"\n📍 Storefront API: http://localhost:{STOREFRONT_PORT}/docs")
        print(f"📍 Commerce API:   http://localhost:{MOCK_API_PORT}/docs")
        print("📍 Demo login:     demo@example.com / password123")
        print("\nPress Ctrl+C to stop all services")
        print("=" * 60)

        # Wait for processes
        for p in processes:
            p.wait()

    except KeyboardInterrupt:
        print("\n\nShutting down services...")
        for p in processes:
            p.terminate()
        for p in processes:
            p.wait()
        print("All services stopped.")


def main():
    print("=" * 60)
    print("Wellness Storefront - Development Server")
    print("=" * 60)

    # Pre-flight checks
    print("\nRunning pre-flight checks...")

    if not check_dependencies():
        sys.exit(1)

    check_env()

    print("\n✓ All checks passed!")

    start_services()


if __name__ == "__main__":
    main()
