"""Static achievement bands for a single achievement percentage."""

from enum import Enum


class AchievementBand(str, Enum):
    """Goal-progress label shown next to a target."""

    NOT_STARTED = "Not Started"
    AT_RISK = "At Risk"
    BEHIND = "Behind"
    ON_TRACK = "On Track"
    ACHIEVED = "Achieved"


# Lower bounds, highest first; a band applies from its bound upward
BAND_THRESHOLDS = (
    (100.0, AchievementBand.ACHIEVED),
    (80.0, AchievementBand.ON_TRACK),
    (50.0, AchievementBand.BEHIND),
)


def classify_band(percentage: float) -> AchievementBand:
    """
    Map an achievement percentage to its band.

    0 is Not Started, (0, 50) At Risk, [50, 80) Behind, [80, 100) On Track
    and 100 or more Achieved. Negative percentages (returns exceeding sales)
    are Not Started.
    """
    for bound, band in BAND_THRESHOLDS:
        if percentage >= bound:
            return band
    if percentage > 0:
        return AchievementBand.AT_RISK
    return AchievementBand.NOT_STARTED
