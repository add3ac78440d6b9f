#!/usr/bin/env python3
"""
Stockroom Startup Script
Launches the API server, the Celery worker and Celery beat together.
"""
import os
import sys
import subprocess
import time
import signal
import threading
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from stockroom.core.config import settings


class StockroomLauncher:
    """Launcher for Stockroom application components."""

    def __init__(self):
        self.processes = []
        self.running = True

    def _spawn(self, name, cmd):
        process = subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True
        )
        self.processes.append((name, process))
        return process

    def start_api_server(self):
        """Start the FastAPI server."""
        print("Starting Stockroom API server...")
        cmd = [
            sys.executable, "-m", "uvicorn",
            "stockroom.main:app",
            "--host", "0.0.0.0",
            "--port", "8000",
        ]
        cmd += ["--reload"] if settings.debug else ["--workers", "4"]
        self._spawn("API Server", cmd)
        print("API server started on http://localhost:8000")

    def start_celery_worker(self):
        """Start Celery worker for background tasks."""
        print("Starting Celery worker...")
        self._spawn("Celery Worker", [
            sys.executable, "-m", "celery",
            "-A", "stockroom.worker.celery",
            "worker",
            "--loglevel=info",
            "--concurrency=2"
        ])
        print("Celery worker started")

    def start_celery_beat(self):
        """Start Celery beat for the stats refresh and log pruning schedule."""
        print("Starting Celery beat...")
        self._spawn("Celery Beat", [
            sys.executable, "-m", "celery",
            "-A", "stockroom.worker.celery",
            "beat",
            "--loglevel=info"
        ])
        print("Celery beat started")

    def check_environment(self):
        """Warn about missing configuration."""
        if not os.path.exists(".env"):
            print("No .env file found; using environment variables and defaults.")
        return True

    def monitor_processes(self):
        """Report processes that exit unexpectedly."""
        reported = set()
        while self.running:
            for name, process in self.processes:
                if process.poll() is not None and name not in reported:
                    print(f"{name} stopped unexpectedly (exit code {process.returncode})")
                    reported.add(name)
            time.sleep(5)

    def signal_handler(self, signum, frame):
        """Handle shutdown signals."""
        print("\nShutting down Stockroom...")
        self.running = False

    def shutdown(self):
        """Shutdown all processes."""
        for name, process in self.processes:
            try:
                process.terminate()
                process.wait(timeout=5)
                print(f"{name} stopped")
            except subprocess.TimeoutExpired:
                process.kill()
                print(f"{name} force killed")

    def run(self):
        """Run the Stockroom application."""
        print("Stockroom - inventory, orders and sales")
        print("=" * 40)

        self.check_environment()

        signal.signal(signal.SIGINT, self.signal_handler)
        signal.signal(signal.SIGTERM, self.signal_handler)

        try:
            self.start_api_server()
            time.sleep(2)

            self.start_celery_worker()
            time.sleep(2)

            self.start_celery_beat()

            print("\nStockroom is now running!")
            if settings.debug:
                print("API documentation: http://localhost:8000/docs")
            print("Health check: http://localhost:8000/health")
            print("\nPress Ctrl+C to stop all services")

            monitor_thread = threading.Thread(target=self.monitor_processes, daemon=True)
            monitor_thread.start()

            while self.running:
                time.sleep(1)

        except KeyboardInterrupt:
            print("\nReceived interrupt signal")
        finally:
            self.shutdown()
            print("Stockroom stopped")


if __name__ == "__main__":
    launcher = StockroomLauncher()
    launcher.run()
