#!/usr/bin/env python3
"""
Launcher script for the Smart Resume Screener application.
Starts the backend API and then the Streamlit dashboard.
"""

import subprocess
import sys
import time
from pathlib import Path

from resume_screener.frontend.api_client import BACKEND_URL, PipelineClient

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def check_backend_status() -> bool:
    return PipelineClient(BACKEND_URL).is_live()


def start_backend():
    print("Starting backend API server...")
    try:
        process = subprocess.Popen(
            [sys.executable, "-m", "uvicorn", "resume_screener.backend.main:app",
             "--host", "0.0.0.0", "--port", "8000", "--timeout-keep-alive", "300"],
            cwd=PROJECT_ROOT,
        )

        for _ in range(30):
            if check_backend_status():
                print(f"✅ Backend API is running on {BACKEND_URL}")
                return process
            time.sleep(1)

        print("❌ Backend failed to start within 30 seconds")
        process.terminate()
        return None

    except OSError as e:
        print(f"❌ Error starting backend: {e}")
        return None


def start_frontend():
    print("Starting Streamlit frontend on http://localhost:8501")
    subprocess.run([
        sys.executable, "-m", "streamlit", "run", str(Path(__file__).parent / "app.py"),
        "--server.port", "8501",
        "--server.address", "0.0.0.0"
    ], cwd=PROJECT_ROOT)


def main():
    print("🚀 Smart Resume Screener Launcher")
    if check_backend_status():
        print("✅ Backend API is already running")
        backend_process = None
    else:
        backend_process = start_backend()
        if not backend_process:
            print("❌ Cannot start application without backend")
            return

    try:
        start_frontend()
    except KeyboardInterrupt:
        print("\n🛑 Shutting down services...")
    finally:
        if backend_process:
            print("Stopping backend...")
            backend_process.terminate()
            backend_process.wait()


if __name__ == "__main__":
    main()
