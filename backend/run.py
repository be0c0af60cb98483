#!/usr/bin/env python3
"""
TripCompanion Relay - Run Script
This script starts the FastAPI relay server
"""

import os
import sys
import subprocess
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

def main():
    print_colored("🚀 Starting TripCompanion Relay...", "blue")

    # Check if we're in the backend directory
    check_file_exists("tripcompanion/main.py", "tripcompanion/main.py not found. Please run this script from the backend directory.")

    # API keys may also come straight from the environment, so a missing .env only warns
    if not Path(".env").exists() and not Path("../.env").exists():
        print_colored("⚠️  Warning: .env file not found.", "yellow")
        print("Create a .env file with any of the following variables:")
        print("  GEMINI_API_KEY=your_api_key_here")
        print("  OPENAI_API_KEY=your_api_key_here")
        print("  GOOGLE_MAPS_API_KEY=your_api_key_here")
        print("  PORT=5000")
        print()

    # Check if virtual environment is activated
    if not os.environ.get('VIRTUAL_ENV'):
        print_colored("⚠️  Virtual environment not activated.", "yellow")
        print("Please activate your virtual environment first:")
        print("  source venv/bin/activate  # On macOS/Linux")
        print("  venv\\Scripts\\activate     # On Windows")
        sys.exit(1)

    # Check if dependencies are installed
    print_colored("🔍 Checking dependencies...", "blue")
    try:
        import fastapi
        import uvicorn
        import httpx
    except ImportError:
        print_colored("❌ Dependencies not installed.", "red")
        print("Installing dependencies...")
        subprocess.run([sys.executable, "-m", "pip", "install", "-e", ".."], check=True)

    port = os.environ.get("PORT", "5000")

    # Start the server
    print_colored("✅ All checks passed!", "green")
    print_colored("🌐 Starting Uvicorn server...", "blue")
    print(f"📍 Relay will be available at: http://localhost:{port}")
    print(f"📍 Health check: http://localhost:{port}/health")
    print(f"📍 API Documentation: http://localhost:{port}/docs")
    print()
    print("Press Ctrl+C to stop the server")
    print()

    # Run uvicorn with auto-reload for development
    try:
        subprocess.run([
            sys.executable, "-m", "uvicorn",
            "tripcompanion.main:app",
            "--reload",
            "--host", "0.0.0.0",
            "--port", port
        ], check=True)
    except KeyboardInterrupt:
        print_colored("\n👋 Relay server stopped.", "yellow")
    except subprocess.CalledProcessError as e:
        print_colored(f"\n❌ Error starting server: {e}", "red")
        sys.exit(1)

if __name__ == "__main__":
    main()
