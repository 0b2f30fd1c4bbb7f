# nav_logger.py
# Handles all file I/O for the navigation system.
# Saves instruction sequences and navigation events as JSON.

import json
import os
import logging
from datetime import datetime
from typing import List, Optional

from .instruction import NavigationInstruction
from .models import PointLike, ProgressResult, Waypoint
from .nav_config import NavConfig
from .sequence import InstructionSequence

# Standard Python logger: configure at app entry point if needed
logger = logging.getLogger(__name__)


class NavLogger:
    """
    Persists instruction sequences and navigation events to JSON files.

    Args:
        config: NavConfig instance for file paths and directories.
    """

    def __init__(self, config: Optional[NavConfig] = None) -> None:
        self.config = config or NavConfig()
        os.makedirs(self.config.log_dir, exist_ok=True)

    # ------------------------------------------------------------------
    # Instruction persistence
    # ------------------------------------------------------------------

    def save_instructions(self, sequence: InstructionSequence) -> bool:
        """
        Serialize an instruction sequence to JSON.

        Args:
            sequence: InstructionSequence to save.

        Returns:
            True on success, False on failure.
        """
        filepath = self.config.instructions_filepath
        try:
            data = {"saved_at": datetime.now().isoformat()}
            data.update(sequence.to_dict())
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            logger.info(f"Instructions saved to {filepath} ({len(sequence)} instructions).")
            return True
        except IOError as e:
            logger.error(f"Failed to save instructions to {filepath}: {e}")
            return False

    def load_instructions(self, filepath: Optional[str] = None) -> Optional[List[NavigationInstruction]]:
        """
        Load previously saved instructions from JSON.

        Args:
            filepath: Path override; uses config default if omitted.

        Returns:
            List of NavigationInstruction objects, or None if loading failed.
        """
        path = filepath or self.config.instructions_filepath
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            instructions = [NavigationInstruction.from_dict(d) for d in data["instructions"]]
            logger.info(f"Instructions loaded from {path} ({len(instructions)} instructions).")
            return instructions
        except (IOError, KeyError, ValueError) as e:
            logger.error(f"Failed to load instructions from {path}: {e}")
            return None

    # ------------------------------------------------------------------
    # Session event logging
    # ------------------------------------------------------------------

    def log_event(self, result: ProgressResult, position: PointLike) -> None:
        """
        Append a single navigation event to the session log file.

        Args:
            result:   ProgressResult from RouteTracker.
            position: Position the result was computed for.
        """
        entry = {
            "timestamp": datetime.now().isoformat(),
            "position": Waypoint.of(position).to_dict(),
            "status": result.status.value,
            "message": result.message,
            "distance_left": result.distance_left,
        }
        try:
            with open(self.config.session_filepath, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, ensure_ascii=False) + "\n")
        except IOError as e:
            logger.error(f"Failed to write event log: {e}")
