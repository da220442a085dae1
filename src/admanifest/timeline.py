"""Timeline reconstruction — a flat, time-ordered view of a manifest's animations.

Timelines in a manifest are attached to layer placements and fire either
at an absolute time ("Timestamp") or relative to an animation group.
Animation groups chain: each group's delay counts from the end of the
previous group in declared order. This module resolves those chains into
absolute start times and returns one entry per animated layer, sorted by
start time, for timeline scrubbing UIs.

Known limitation: a layer contributes at most one entry (the first step
of its first auto-playing timeline in the first scene).
"""

from .manifest import get_layers, manifest_duration, to_number


TIMESTAMP_TRIGGER = "Timestamp"
POINTER_TRIGGERS = {"On Hover Ad", "On Click Ad"}

DEFAULT_STEP_DURATION = 0.5
DEFAULT_GROUP_DURATION = 0.5

ANIMATED_PROPERTIES = ("x", "y", "scale", "opacity", "rotation")


def group_start_times(groups: list[dict]) -> dict[str, float]:
    """Absolute start time of each animation group, by id.

    Example: (delay, duration) = (0.5, 1.0), (0.2, 0.5), (0, 2.0)
    gives starts 0.5, 1.7, 2.2. Entries that are not mappings are skipped;
    groups without a string id still advance the chain.
    """
    starts = {}
    running = 0.0
    for group in groups:
        if not isinstance(group, dict):
            continue
        start = running + to_number(group.get("delay"))
        group_id = group.get("id")
        if isinstance(group_id, str):
            starts[group_id] = start
        running = start + to_number(group.get("duration"), DEFAULT_GROUP_DURATION)
    return starts


def is_animated(settings: dict) -> bool:
    """A step animates if it sets opacity, x, y or rotation, or a scale other than 1.

    A property that is present counts even when its value is null.
    """
    if any(prop in settings for prop in ("opacity", "x", "y", "rotation")):
        return True
    if "scale" not in settings:
        return False
    scale = settings["scale"]
    return scale is None or to_number(scale, 1.0) != 1


def _first_animated_step(placement: dict) -> tuple[dict, dict] | None:
    """(timeline, step settings) for the first auto-playing animation."""
    timelines = placement.get("timelines")
    if not isinstance(timelines, list):
        return None
    for timeline in timelines:
        if not isinstance(timeline, dict):
            continue
        trigger = timeline.get("trigger")
        if trigger is not None and not isinstance(trigger, str):
            continue
        if trigger in POINTER_TRIGGERS:
            continue
        steps = timeline.get("steps") or []
        if not isinstance(steps, list) or not steps or not isinstance(steps[0], dict):
            continue
        settings = steps[0].get("settings") or {}
        if isinstance(settings, dict) and is_animated(settings):
            return timeline, settings
    return None


def extract_animated_layers(manifest: dict) -> list[dict]:
    """One timeline entry per animated layer, sorted by start time.

    Each entry: {name, guid, delay, duration, endTime, animationType,
    trigger, properties}. Incomplete or malformed manifests give fewer
    entries, never an error.
    """
    groups = manifest.get("animationGroups") or []
    starts = group_start_times(groups if isinstance(groups, list) else [])
    entries = []

    for layer in get_layers(manifest):
        if not isinstance(layer, dict):
            continue
        shots = layer.get("shots") or []
        if not isinstance(shots, list) or not shots or not isinstance(shots[0], dict):
            continue
        found = _first_animated_step(shots[0])
        if found is None:
            continue
        timeline, settings = found

        trigger = timeline.get("trigger")
        delay = to_number(settings.get("delay"))
        if trigger and trigger != TIMESTAMP_TRIGGER:
            delay += starts.get(trigger, 0.0)
        duration = to_number(settings.get("duration"), DEFAULT_STEP_DURATION)

        entries.append({
            "name": layer.get("name"),
            "guid": layer.get("guid"),
            "delay": delay,
            "duration": duration,
            "endTime": delay + duration,
            "animationType": settings.get("animationType") or "from",
            "trigger": trigger,
            "properties": {
                prop: settings[prop]
                for prop in ANIMATED_PROPERTIES
                if prop in settings
            },
        })

    entries.sort(key=lambda entry: entry["delay"])
    return entries


def timeline_summary(manifest: dict) -> dict:
    """Total duration plus the animated layer entries."""
    return {
        "duration": manifest_duration(manifest),
        "layers": extract_animated_layers(manifest),
    }
