"""Persisted per-generation records of the best model."""

import logging
from pathlib import Path
from typing import Iterable

from paretogp.evolution.individual import Individual

logger = logging.getLogger(__name__)


class ModelsLog:
    """Appends one ``<genome>,<fitness>`` line per best individual."""

    def __init__(self, path: Path | str, objective: str):
        """
        Args:
            path: Log file path
            objective: Objective whose score is written next to the genome
        """
        self.path = Path(path)
        self.objective = objective

    def reset(self) -> None:
        """Delete a log left over from a previous run."""
        if self.path.exists():
            logger.info(f"Deleting previous models log at {self.path}")
            self.path.unlink()

    def format_record(self, individual: Individual) -> str:
        return f"{individual.genome},{individual.fitness[self.objective]}\n"

    def append(self, individuals: Iterable[Individual]) -> int:
        """Append records, returning how many were written."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        count = 0
        with open(self.path, "a") as f:
            for ind in individuals:
                f.write(self.format_record(ind))
                count += 1
        logger.info(f"Saved {count} models to {self.path}")
        return count
