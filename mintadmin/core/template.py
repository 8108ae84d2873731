"""Admin stack template loading"""

from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Optional

from mintadmin.constants import TEMPLATE_FILENAME
from mintadmin.exceptions import ConfigurationError


@dataclass(frozen=True)
class StackTemplate:
    """CloudFormation template body, loaded once and injected into the deployer."""

    body: str
    source: str = TEMPLATE_FILENAME

    def __repr__(self) -> str:
        return f"StackTemplate(source={self.source}, size={len(self.body)})"


def load_template(path: Optional[Path] = None) -> StackTemplate:
    """
    Load the admin stack template.

    Args:
        path: Template file to use instead of the bundled one

    Returns:
        StackTemplate

    Raises:
        ConfigurationError: If the template cannot be read or is empty
    """
    try:
        if path is not None:
            body = Path(path).read_text()
            source = str(path)
        else:
            body = (
                resources.files("mintadmin.templates")
                .joinpath(TEMPLATE_FILENAME)
                .read_text()
            )
            source = TEMPLATE_FILENAME
    except OSError as e:
        raise ConfigurationError(
            "Failed to read stack template",
            context=f"Template: {path or TEMPLATE_FILENAME}, Error: {e}",
        )

    if not body.strip():
        raise ConfigurationError(f"Stack template is empty: {source}")

    return StackTemplate(body=body, source=source)
