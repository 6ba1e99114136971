"""Domain <-> wire codecs."""

from . import genesis, chain_config, load_test, workflow, template


__all__ = ["genesis", "chain_config", "load_test", "workflow", "template"]
