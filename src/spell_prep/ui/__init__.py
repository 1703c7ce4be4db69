"""UI module for Spell Prep.

Submodules:
    app: Streamlit page (the renderer)
    formatting: Plain-text card formatting
    theme: Card styling

Usage:
    Run the application with:
        streamlit run src/spell_prep/ui/app.py

    Or from the installed console script:
        spell-prep
"""

from __future__ import annotations


def run_app(argv: list[str] | None = None) -> int:
    """Launch the Streamlit page, forwarding extra command-line arguments.

    Arguments after ``spell-prep`` are passed on to ``streamlit run``, e.g.
    ``spell-prep --server.port 8600``.

    Returns:
        Streamlit's exit code.
    """
    import subprocess
    import sys
    from pathlib import Path

    extra = sys.argv[1:] if argv is None else argv
    app_path = Path(__file__).parent / "app.py"
    command = [sys.executable, "-m", "streamlit", "run", str(app_path), *extra]
    return subprocess.run(command, check=False).returncode


__all__ = [
    "run_app",
]
