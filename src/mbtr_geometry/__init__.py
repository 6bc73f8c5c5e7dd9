from .bindings import angle_cosines_string_keyed, decode_triplet_key, encode_triplet_key
from .cell import cell_anchor_mask
from .config import KernelConfig
from .displacement import DisplacementCache
from .kernel import GeometryKernel
from .keys import TripletKey
from .snapshot import ConfigurationSnapshot

__version__ = "0.1.0"

__all__ = [
    "ConfigurationSnapshot",
    "GeometryKernel",
    "KernelConfig",
    "DisplacementCache",
    "TripletKey",
    "cell_anchor_mask",
    "angle_cosines_string_keyed",
    "encode_triplet_key",
    "decode_triplet_key",
]
