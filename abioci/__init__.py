from abioci import oci, sources, submodules

__all__ = ["oci", "sources", "submodules"]
