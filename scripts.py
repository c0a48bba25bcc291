#!/usr/bin/env python3
"""
Console entry points for the prediction proxy and the dashboard.
"""

import os
import subprocess
import sys

import uvicorn

BACKEND_HOST = os.environ.get("BACKEND_HOST", "0.0.0.0")
BACKEND_PORT = int(os.environ.get("BACKEND_PORT", "8000"))
FRONTEND_PORT = int(os.environ.get("FRONTEND_PORT", "8501"))


def run_backend():
    """Serve the price prediction proxy with uvicorn."""
    print("🚀 Starting Flight Price Dashboard proxy...")
    print(f"📍 Predictions: http://localhost:{BACKEND_PORT}/api/predict-price")
    print("-" * 40)

    uvicorn.run(
        "backend.api:app",
        host=BACKEND_HOST,
        port=BACKEND_PORT,
        reload=True,
        log_level="info",
    )


def run_frontend():
    """Launch the Streamlit dashboard against the local proxy."""
    print("🚀 Starting Flight Price Dashboard...")
    print(f"📍 Dashboard: http://localhost:{FRONTEND_PORT}")
    print("-" * 40)

    env = {**os.environ}
    env.setdefault("API_BASE_URL", f"http://localhost:{BACKEND_PORT}")

    try:
        subprocess.run(
            [
                sys.executable,
                "-m",
                "streamlit",
                "run",
                "frontend/app.py",
                f"--server.port={FRONTEND_PORT}",
                "--server.address=0.0.0.0",
            ],
            check=True,
            env=env,
        )
    except KeyboardInterrupt:
        print("\n👋 Dashboard stopped")
    except subprocess.CalledProcessError as e:
        print(f"❌ Dashboard error: {e}")
        sys.exit(1)
