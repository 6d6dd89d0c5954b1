"""Configuration classes for size factor centering.

All parameters can be loaded from YAML.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ..sanitize.config import SanitizeConfig


class BlockMode(Enum):
    """Strategy for combining block means in blocked centering.

    PER_BLOCK scales each block separately so that it has a mean of 1.
    LOWEST divides all size factors by the lowest non-zero block mean.
    """

    PER_BLOCK = "per_block"
    LOWEST = "lowest"


def parse_block_mode(value: Union[str, BlockMode]) -> BlockMode:
    """Resolve a block mode from its name or enum member."""
    if isinstance(value, BlockMode):
        return value
    try:
        return BlockMode(str(value).lower())
    except ValueError:
        valid = [m.value for m in BlockMode]
        raise ValueError(f"Unknown block mode: {value!r} (expected one of {valid})")


@dataclass(frozen=True)
class CenteringConfig:
    """Options for centering size factors.

    Attributes
    ----------
    block_mode : BlockMode
        Strategy for blocked centering. With PER_BLOCK, the scaled size
        factors are identical to separate unblocked centering of each block,
        but systematic coverage differences between blocks are lost. With
        LOWEST, all blocks are downscaled to match the lowest-coverage
        block, which avoids upscaling of low-coverage blocks.
    ignore_invalid : bool
        Whether to skip NaN, infinite and non-positive size factors when
        computing means. The invalid values themselves are left untouched.
        Can be set to False for efficiency if such values cannot occur.
    """

    block_mode: BlockMode = BlockMode.LOWEST
    ignore_invalid: bool = True

    def __post_init__(self):
        object.__setattr__(self, "block_mode", parse_block_mode(self.block_mode))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "block_mode": self.block_mode.value,
            "ignore_invalid": self.ignore_invalid,
        }


@dataclass
class SizeFactorConfig:
    """Master configuration for centering and sanitizing size factors.

    Attributes
    ----------
    centering : CenteringConfig
        Centering options
    sanitize : SanitizeConfig
        Options for replacing invalid size factors after centering
    """

    centering: CenteringConfig = field(default_factory=CenteringConfig)
    sanitize: SanitizeConfig = field(default_factory=SanitizeConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> "SizeFactorConfig":
        """Load configuration from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        # Handle nested size_factors section
        if "size_factors" in data:
            data = data["size_factors"] or {}

        return cls(
            centering=CenteringConfig(**data.get("centering", {})),
            sanitize=SanitizeConfig(**data.get("sanitize", {})),
        )

    @classmethod
    def default(cls) -> "SizeFactorConfig":
        """Create default configuration."""
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "centering": self.centering.to_dict(),
            "sanitize": self.sanitize.to_dict(),
        }
