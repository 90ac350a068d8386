"""Handles rendering parsed scripts into output files (JSON, YAML, plain-text call sheet)."""

import json
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Type

import yaml

from .models import ParsedScript
from .exceptions import FormattingError

logger = logging.getLogger(__name__)

class ScriptFormatter(ABC):
    """Abstract base class for parsed-script formatters."""

    extension = "txt"

    @abstractmethod
    def format_script(self, parsed: ParsedScript) -> str:
        """
        Renders the parsed script as a string.

        Args:
            parsed: The result from the script parser.

        Returns:
            The rendered document.
        """
        pass

    def write(self, parsed: ParsedScript, output_path: str) -> None:
        """
        Renders the parsed script and writes it to disk.

        Args:
            parsed: The result from the script parser.
            output_path: The path to save the rendered file.

        Raises:
            FormattingError: If rendering or writing fails.
        """
        logger.info(f"Writing {type(self).__name__} output to: {output_path}")
        try:
            rendered = self.format_script(parsed)
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(rendered)
            logger.info(f"Successfully wrote {len(parsed.beats)} beats to {output_path}")
        except IOError as e:
            logger.error(f"Failed to write output file to {output_path}: {e}", exc_info=True)
            raise FormattingError(f"Could not write output file: {e}") from e
        except yaml.YAMLError as e:
            logger.error(f"Failed to render YAML for {output_path}: {e}", exc_info=True)
            raise FormattingError(f"Could not render YAML: {e}") from e


class JSONFormatter(ScriptFormatter):
    """Emits the camelCase structure consumed by the execution-mode screen."""

    extension = "json"

    def format_script(self, parsed: ParsedScript) -> str:
        return json.dumps(parsed.to_dict(), indent=2, ensure_ascii=False) + "\n"


class YAMLFormatter(ScriptFormatter):
    """Same structure as JSONFormatter, as YAML."""

    extension = "yaml"

    def format_script(self, parsed: ParsedScript) -> str:
        return yaml.safe_dump(parsed.to_dict(), sort_keys=False, allow_unicode=True)


class TextFormatter(ScriptFormatter):
    """Formats a parsed script as a printable call sheet."""

    extension = "txt"

    def format_script(self, parsed: ParsedScript) -> str:
        if not parsed.is_structured:
            return "(Unstructured script: no beats found)\n"

        blocks: List[str] = []
        for beat in parsed.beats:
            lines = [f"[{beat.number}] {beat.title}"]
            lines.extend(f"    {say_line}" for say_line in beat.say_this.split("\n"))
            for branch in beat.branches:
                lines.append(f"    ? \"{branch.condition}\"")
                target = f"  → Beat {branch.target_beat}" if branch.target_beat is not None else ""
                lines.append(f"      → {branch.response}{target}")
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks) + "\n"


FORMATTERS: Dict[str, Type[ScriptFormatter]] = {
    "json": JSONFormatter,
    "yaml": YAMLFormatter,
    "text": TextFormatter,
}

def get_formatter(name: str) -> ScriptFormatter:
    """
    Looks up a formatter by name (case-insensitive).

    Raises:
        FormattingError: If no formatter is registered under that name.
    """
    formatter_cls = FORMATTERS.get((name or "").lower())
    if formatter_cls is None:
        raise FormattingError(f"Unsupported output format '{name}'. Choose one of: {', '.join(FORMATTERS)}")
    return formatter_cls()
