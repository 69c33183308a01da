"""Palette quantization with KMeans over the sampled RGB values."""

from __future__ import annotations

from typing import List, Tuple

import numpy as np
from sklearn.cluster import KMeans

MIN_COLORS = 1
MAX_COLORS = 10


def validate_color_count(count: int) -> int:
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
        raise ValueError(f"Number of colors must be an integer, got {count!r}")
    if not MIN_COLORS <= count <= MAX_COLORS:
        raise ValueError(f"Number of colors must be within {MIN_COLORS}..{MAX_COLORS}, got {count}")
    return int(count)


class KMeansQuantizer:
    """Build a palette of ``desired_color_count`` colours from RGB samples.

    Clustering runs on the distinct colours weighted by how often they occur,
    which gives the same centroids as clustering every pixel.
    """

    def __init__(self, desired_color_count: int, random_state: int = 42) -> None:
        self.desired_color_count = validate_color_count(desired_color_count)
        self.random_state = random_state

    def quantize(self, samples: np.ndarray) -> List[Tuple[int, int, int]]:
        """Return the palette, most common colour first.

        Doxygen:
        - @param samples: (N, 3) array of RGB values 0..255.
        - @return: Up to ``desired_color_count`` RGB tuples; fewer only when the
          samples hold fewer distinct colours.
        - @throws ValueError: If there are no samples.
        """
        samples = np.asarray(samples).reshape(-1, 3)
        if samples.shape[0] == 0:
            raise ValueError("Cannot build a palette from an empty sample.")

        colors, counts = np.unique(samples.astype(np.uint8), axis=0, return_counts=True)
        k = min(self.desired_color_count, colors.shape[0])

        if k == colors.shape[0]:
            centers = colors.astype(np.float64)
            populations = counts
        else:
            kmeans = KMeans(n_clusters=k, random_state=self.random_state, n_init="auto")
            kmeans.fit(colors.astype(np.float64), sample_weight=counts)
            centers = kmeans.cluster_centers_
            populations = np.bincount(kmeans.labels_, weights=counts, minlength=k)

        order = np.argsort(-populations, kind="stable")
        rounded = np.clip(np.rint(centers[order]), 0, 255).astype(int)
        return [(int(r), int(g), int(b)) for r, g, b in rounded]
