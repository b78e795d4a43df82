"""Launcher for the riskcheck web interface.

Runs the Streamlit risk register page. A configuration file given with
``--config`` is handed to the page through the ``RISKCHECK_CONFIG``
environment variable, so the currency symbol and risk level thresholds
match the command line tool.
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional

import typer

CONFIG_ENV_VAR = "RISKCHECK_CONFIG"

app = typer.Typer(add_completion=False)


def build_command(port: int = 8501, headless: bool = False) -> List[str]:
    """Streamlit command line for the risk register page."""
    app_path = Path(__file__).parent / "streamlit_app.py"
    cmd = [
        sys.executable, "-m", "streamlit", "run", str(app_path),
        "--server.port", str(port),
        "--theme.base", "light",
    ]
    if headless:
        cmd += ["--server.headless", "true"]
    return cmd


def build_environment(config: Optional[Path] = None) -> Dict[str, str]:
    env = dict(os.environ)
    if config is not None:
        env[CONFIG_ENV_VAR] = str(config.resolve())
    return env


@app.command()
def main(
    port: int = typer.Option(8501, "--port", "-p", help="Port to serve the page on"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", exists=True, dir_okay=False,
                                          help="Configuration file (JSON or YAML)"),
    headless: bool = typer.Option(False, "--headless", help="Do not open a browser"),
):
    """Start the riskcheck web interface."""
    typer.echo("🚀 Starting riskcheck risk register...")
    typer.echo(f"📍 Open your browser to: http://localhost:{port}")
    if config is not None:
        typer.echo(f"⚙️  Using configuration: {config}")
    typer.echo("⏹️  Press Ctrl+C to stop the server")

    try:
        subprocess.run(build_command(port, headless), env=build_environment(config), check=True)
    except KeyboardInterrupt:
        typer.echo("\n👋 riskcheck stopped")
    except subprocess.CalledProcessError as e:
        typer.echo(f"❌ Error starting Streamlit: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
