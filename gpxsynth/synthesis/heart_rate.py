"""
Heart-Rate Model

Synthetic heart rate over the course of an activity:
- Warm-up over the first 10% (ramp up to the profile average)
- Steady state with overlapping waves, jitter and occasional effort spikes
- Cool-down over the last 10% (ramp down to the profile minimum)
"""

from math import pi, sin
from typing import Optional

from .elevation import route_progress
from .noise import NoiseSource
from .profiles import ActivityProfile

WARMUP_END = 0.1
COOLDOWN_START = 0.9
WARMUP_OFFSET_BPM = 10
SPIKE_PROBABILITY = 0.05
SPIKE_MAX_BPM = 10


def generate_heart_rate(
    distance_covered: float,
    total_distance: float,
    profile: ActivityProfile,
    sample_index: int,
    noise: Optional[NoiseSource] = None
) -> int:
    """
    Heart rate in bpm at a point along the route.

    Args:
        distance_covered: Distance from start (meters)
        total_distance: Route length (meters)
        profile: Activity profile supplying the heart-rate range
        sample_index: Index of the sample in the track, shifts the wave phase
        noise: Random source, a fresh unseeded one if omitted

    Returns:
        Heart rate rounded to whole beats per minute
    """
    hr_min = profile.heart_rate_min
    hr_max = profile.heart_rate_max
    hr_avg = profile.heart_rate_avg
    progress = route_progress(distance_covered, total_distance)

    if progress < WARMUP_END:
        warmup_progress = progress / WARMUP_END
        start_hr = hr_min - WARMUP_OFFSET_BPM
        return int(round(start_hr + (hr_avg - start_hr) * warmup_progress))

    if progress > COOLDOWN_START:
        # The last interval can overrun the route end
        cooldown_progress = min(1.0, (progress - COOLDOWN_START) / (1 - COOLDOWN_START))
        return int(round(hr_avg - (hr_avg - hr_min) * cooldown_progress))

    noise = noise or NoiseSource()

    wave1 = sin(progress * pi * 8) * 5
    wave2 = sin(progress * pi * 15 + sample_index * 0.1) * 3
    hr = hr_avg + wave1 + wave2 + noise.uniform(-3, 3)

    # Occasional effort bursts (short climbs, surges)
    if noise.chance(SPIKE_PROBABILITY):
        hr += noise.uniform(0, SPIKE_MAX_BPM)

    hr = max(hr_min, min(hr_max, hr))

    return int(round(hr))
