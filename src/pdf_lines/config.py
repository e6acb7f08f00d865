from dataclasses import dataclass, field


@dataclass(frozen=True)
class LayoutConfig:
    """Tunables for line reconstruction."""

    # Max |b| and |c| of the text matrix for a fragment to count as horizontal.
    horizontal_epsilon: float = 0.01
    # A fragment this many times wider than a vertically overlapping one wipes it out.
    noise_width_ratio: float = 10.0


@dataclass(frozen=True)
class NumberingConfig:
    """Tunables for drawing line numbers into a PDF."""

    # Number left and right halves of each page separately.
    columns: bool = False
    # Right column picks up where the left one stopped (else restarts at 1).
    continue_right: bool = True
    font_size: float = 8.0
    # PyMuPDF base-14 alias for Helvetica.
    font_name: str = "helv"
    color: tuple[float, float, float] = (0.5, 0.5, 0.5)
    # Points from the left page edge.
    left_margin: float = 5.0
    # Points from the right page edge (column mode only).
    right_margin: float = 15.0
    layout: LayoutConfig = field(default_factory=LayoutConfig)
