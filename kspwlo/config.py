"""Configuration classes for kspwlo components."""

from dataclasses import dataclass


@dataclass
class OnePassConfig:
    """Tunables for the OnePass+ label-setting search."""

    # Lower bound on labels admitted per vertex, regardless of k
    min_labels_per_vertex: int = 16

    # Labels admitted per vertex for every requested path
    labels_per_path: int = 8

    # Upper bound on labels admitted per vertex
    max_labels_per_vertex: int = 4096

    # Slack allowed when comparing floating-point priorities
    cost_tolerance: float = 1e-9

    def labels_per_vertex(self, k: int) -> int:
        """Return the per-vertex admission cap for a request of ``k`` paths."""
        estimated = self.labels_per_path * k
        return max(
            self.min_labels_per_vertex, min(estimated, self.max_labels_per_vertex)
        )


# Global configuration instance
ONEPASS_CONFIG = OnePassConfig()
