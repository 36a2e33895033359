from extdata.common.factories.adapter_factory import (
    AdapterBuilder,
    AdapterFactory,
    default_factory,
)

__all__ = ["AdapterBuilder", "AdapterFactory", "default_factory"]
