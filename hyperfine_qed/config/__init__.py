"""Configuration management for hyperfine coupling calculations."""

from typing import Dict, Any
import json
from dataclasses import asdict

from ..models import HyperfineAtom, AtomPair, SamplingParameters


class ConfigManager:
    """Manages calculation configuration and parameters."""

    @staticmethod
    def load_config(filepath: str) -> Dict[str, Any]:
        """Load configuration from a JSON file."""
        with open(filepath, 'r') as f:
            return json.load(f)

    @staticmethod
    def save_config(config: Dict[str, Any], filepath: str) -> None:
        """Save configuration to a JSON file."""
        with open(filepath, 'w') as f:
            json.dump(config, f, indent=2)

    @staticmethod
    def validate_config(config: Dict[str, Any]) -> bool:
        """Validate configuration dictionary."""
        required_sections = ['atom', 'geometry', 'sampling']
        for section in required_sections:
            if section not in config:
                raise ValueError(f"Missing required section: {section}")
        if len(config['atom'].get('F_levels', [])) < 2:
            raise ValueError("atom.F_levels must list at least two manifolds")
        return True

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """Create parameter objects from configuration dictionary."""
        cls.validate_config(config_dict)

        atom = HyperfineAtom(**config_dict['atom'])
        pair = AtomPair(
            r1=tuple(config_dict['geometry']['r1']),
            r2=tuple(config_dict['geometry']['r2']),
        )
        sampling = SamplingParameters(**config_dict['sampling'])

        return {
            'atom': atom,
            'pair': pair,
            'sampling': sampling,
            'scan': config_dict.get('scan', {}),
        }

    @classmethod
    def to_dict(cls, params: Dict[str, Any]) -> Dict[str, Any]:
        """Convert parameter objects back to dictionary."""
        atom = asdict(params['atom'])
        atom['F_levels'] = list(atom['F_levels'])
        return {
            'atom': atom,
            'geometry': {
                'r1': list(params['pair'].r1),
                'r2': list(params['pair'].r2),
            },
            'sampling': asdict(params['sampling']),
            'scan': params.get('scan', {}),
        }


# Default configuration
def get_default_config() -> Dict[str, Any]:
    """Get default configuration parameters.

    Lengths are in units of the transition wavelength.
    """
    return {
        "atom": {
            "F_levels": ["1/2", "1/2"],
            "upper": 1,
            "lower": 2,
            "wavenumber": 6.283185307179586,  # 2 pi / wavelength
            "linewidth": 1.0
        },
        "geometry": {
            "r1": [0.0, 0.0, 0.0],
            "r2": [0.0, 0.0, 0.25]  # quarter wavelength along z
        },
        "sampling": {
            "n_samples": 50,
            "method": "fibonacci",
            "numerical_aperture": 0.5,
            "theta": 0.0,
            "phi": 0.0,
            "seed": 1
        },
        "scan": {
            "distance_range": [0.05, 2.0],
            "num_points": 400,
            "direction": [0.0, 0.0, 1.0],
            "polarization": 0
        }
    }
