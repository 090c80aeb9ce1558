from .cd_read_use_case import CDReadUseCase
from .cd_write_use_case import CDWriteUseCase

__all__ = ["CDReadUseCase", "CDWriteUseCase"]
