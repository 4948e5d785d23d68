"""Default slide templates shipped with the package."""

from pathlib import Path

TEMPLATES_DIR = Path(__file__).parent

DEFAULT_COMMIT_DETAILS_TEMPLATE_PATH = TEMPLATES_DIR / "commit_details.md"
DEFAULT_SLIDE_TEMPLATE_PATH = TEMPLATES_DIR / "slide.md"
DEFAULT_COMMIT_ONLY_TEMPLATE_PATH = TEMPLATES_DIR / "commit_only.md"


def load_template(template_path: Path) -> str:
    """Load a template file.

    Args:
        template_path: Path to the template file

    Returns:
        The content of the template file, without the trailing newline.

    Raises:
        FileNotFoundError: If the template file does not exist.
        RuntimeError: If the template file cannot be read.
    """
    try:
        return template_path.read_text(encoding="utf-8").rstrip("\n")
    except FileNotFoundError:
        raise FileNotFoundError(f"Slide template file not found: {template_path}") from None
    except Exception as e:
        raise RuntimeError(f"Failed to read slide template file: {template_path}: {e}") from e
