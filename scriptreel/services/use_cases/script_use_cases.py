"""
Script use cases - generate script variants and list the owner's history.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from scriptreel.core import OwnerContext, get_logger
from scriptreel.models import GenerateScriptsResponse, Script, ScriptSetResponse
from scriptreel.services.infrastructure.storage import (
    DocumentScriptSetRepository,
    ScriptSetRecord,
    ScriptSetRepository,
)
from scriptreel.services.script_generation import ScriptGenerator

from .base import UseCase

logger = get_logger(__name__, service="scripts")


@dataclass
class ScriptGenerationRequest:
    owner: OwnerContext
    topic: str
    num_variations: int


class GenerateScriptsUseCase(UseCase[ScriptGenerationRequest, GenerateScriptsResponse]):
    """Generate scripts, then save them as a ScriptSet.

    A failed save is logged and reported with ``saved=False``; the scripts are
    still returned.
    """

    def __init__(
        self,
        generator: Optional[ScriptGenerator] = None,
        repository: Optional[ScriptSetRepository] = None,
    ):
        self.generator = generator or ScriptGenerator()
        self.repository = repository or DocumentScriptSetRepository()

    async def execute(self, request: ScriptGenerationRequest) -> GenerateScriptsResponse:
        topic = (request.topic or "").strip()
        scripts = await self.generator.generate(topic, request.num_variations)

        record = ScriptSetRecord(
            owner_id=request.owner.user_id,
            topic=topic,
            scripts=scripts,
            created_at=datetime.now(),
        )
        script_set_id = None
        try:
            script_set_id = await asyncio.to_thread(self.repository.create, record)
        except Exception as exc:
            logger.error("Failed to save script set", extra={"error": str(exc)}, exc_info=True)

        return GenerateScriptsResponse(
            script_set_id=script_set_id,
            topic=topic,
            scripts=[Script(**s) for s in scripts],
            saved=script_set_id is not None,
        )


class ListScriptSetsUseCase(UseCase[OwnerContext, List[ScriptSetResponse]]):
    def __init__(self, repository: Optional[ScriptSetRepository] = None):
        self.repository = repository or DocumentScriptSetRepository()

    async def execute(self, request: OwnerContext) -> List[ScriptSetResponse]:
        records = await asyncio.to_thread(self.repository.list_by_owner, request.user_id)
        return [
            ScriptSetResponse(
                id=record.id,
                topic=record.topic,
                scripts=[Script(**s) for s in record.scripts],
                created_at=record.created_at,
            )
            for record in records
        ]
