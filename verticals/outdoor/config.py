"""Outdoor vertical configuration, read once from the environment."""

from patterns.domain_config import SummitBaseConfig

config = SummitBaseConfig.from_env()
