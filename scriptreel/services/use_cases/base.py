"""
Base use case class.

Each use case encapsulates a single business operation and is independent of
HTTP details: routes translate requests into request objects, call
``execute`` and let ScriptReelError subclasses propagate to the exception
handler.

Example:
    >>> class ListVideosUseCase(UseCase[ListVideosRequest, VideoPageResponse]):
    ...     async def execute(self, request: ListVideosRequest) -> VideoPageResponse:
    ...         ...
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class UseCase(ABC, Generic[RequestT, ResponseT]):
    """
    Base use case abstract class.

    Type Parameters:
        RequestT: Type of the input request object
        ResponseT: Type of the output response object
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        """
        Execute the use case and return a response.

        Raises:
            ScriptReelError subclasses (ValidationError, NotFoundError, ...).
            HTTP exceptions are never raised here.
        """
        pass
