"""Script generation - topic to narration script variants."""

from .generator import ScriptGenerator, normalize_scripts

__all__ = ["ScriptGenerator", "normalize_scripts"]
