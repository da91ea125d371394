from typing import Any

from .defaults import EMPTY_DIGEST, EMPTY_JSON, EMPTY_MEDIA_TYPE, EMPTY_SIZE
from .descriptor import Descriptor


class EmptyConfig(Descriptor):
    """The empty descriptor, used as config when there is nothing to configure"""

    mediaType: str = EMPTY_MEDIA_TYPE
    digest: str = EMPTY_DIGEST
    size: int = EMPTY_SIZE

    def model_post_init(self, __context: Any) -> None:
        self.data = EMPTY_JSON
