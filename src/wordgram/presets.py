"""Preset configurations for common use cases."""

PRESETS = {
    "compatible": {
        "description": "Historical behavior: packed context keys, one-shot weights",
        "exact_keys": False,
        "refine": False,
        "report_every": 100,
        "use_case": "Reproducing earlier evaluation numbers",
    },
    "exact": {
        "description": "Collision-free context keys, one-shot weights",
        "exact_keys": True,
        "refine": False,
        "report_every": 100,
        "use_case": "General next-word prediction",
    },
    "refined": {
        "description": "Collision-free context keys with weight refinement",
        "exact_keys": True,
        "refine": True,
        "report_every": 1000,
        "use_case": "Offline evaluation where training time is not a concern",
    },
}

# Keys of a preset that are NgramModel constructor arguments
MODEL_PARAMETERS = ("exact_keys", "refine", "report_every")


def get_preset(preset_name: str) -> dict:
    """Copy of a preset's configuration. Unknown names raise ValueError."""
    try:
        return dict(PRESETS[preset_name])
    except KeyError:
        raise ValueError(f"Unknown preset: '{preset_name}'. Available: {', '.join(list_presets())}") from None


def model_parameters(preset_name: str) -> dict:
    """Only the NgramModel keyword arguments of a preset."""
    config = get_preset(preset_name)
    return {key: config[key] for key in MODEL_PARAMETERS}


def list_presets() -> list[str]:
    return sorted(PRESETS)


def print_presets() -> None:
    """Print one block per preset: its settings, then what it is for."""
    print(f"\n{'Preset':<12} {'Keys':<8} {'Refine':<7} {'Report':>7}  Description")
    print("-" * 78)
    for name in list_presets():
        config = PRESETS[name]
        layout = "exact" if config["exact_keys"] else "packed"
        refine = "yes" if config["refine"] else "no"
        print(f"{name:<12} {layout:<8} {refine:<7} {config['report_every']:>7}  {config['description']}")
        print(f"{'':<38}for: {config['use_case']}")
