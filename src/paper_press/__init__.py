"""Top-level package for Paper Press.

Provides subpackages:
- paper_press.core – immutable paper/question/settings models and errors
- paper_press.layout – text metrics, watermark fitting and the layout cursor
- paper_press.render – question blocks and the pagination director
- paper_press.output – drawing surfaces (recording and ReportLab PDF)
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    try:
        from importlib.metadata import PackageNotFoundError, version as pkg_version
        return pkg_version("paper-press")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
