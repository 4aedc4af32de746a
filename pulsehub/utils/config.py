"""Configuration management."""

import json
import yaml
from pathlib import Path
from typing import Dict, Any


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML or JSON file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r') as f:
        if path.suffix.lower() in ['.yaml', '.yml']:
            return yaml.safe_load(f) or {}
        elif path.suffix.lower() == '.json':
            return json.load(f)
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        'calendar': {
            'first_weekday': 6,  # Sunday
        },
        'grouping': {
            'this_week_days': 7,
            'this_month_days': 30,
        },
        'dashboard': {
            'time_range': 'week',
            'upcoming_limit': 5,
            'pending_decision_limit': 3,
        },
        'snapshot': {
            'suggestion_limit': 5,
            'recent_decision_limit': 3,
            'fallback_to_samples': True,
        },
        'store': {
            'path': 'data/pulsehub.json',
        },
        'samples': {
            'seed': 42,
            'task_count': 12,
            'meeting_count': 8,
            'decision_count': 6,
            'observation_count': 4,
        },
        'logging': {
            'level': 'INFO',
        },
    }
