"""Provider-agnostic building blocks for the bridge.

Subpackages are imported directly (``provider_bridge.base.auth``,
``provider_bridge.base.aggregation`` ...); nothing is re-exported here so that
importing one component never drags in the others.
"""
