"""
Script generation routes
"""

from typing import List

from fastapi import APIRouter, Depends

from ..core import OwnerContext, require_owner
from ..models import GenerateScriptsRequest, GenerateScriptsResponse, ScriptSetResponse
from ..services.use_cases import (
    GenerateScriptsUseCase,
    ListScriptSetsUseCase,
    ScriptGenerationRequest,
)

router = APIRouter(prefix="/scripts", tags=["scripts"])


@router.post("/generate", response_model=GenerateScriptsResponse)
async def generate_scripts(request: GenerateScriptsRequest, owner: OwnerContext = Depends(require_owner)):
    """Generate narration script variants for a topic and save them"""
    use_case = GenerateScriptsUseCase()
    return await use_case.execute(
        ScriptGenerationRequest(owner=owner, topic=request.topic, num_variations=request.num_variations)
    )


@router.get("", response_model=List[ScriptSetResponse])
async def list_script_sets(owner: OwnerContext = Depends(require_owner)):
    """The owner's script history, newest first"""
    return await ListScriptSetsUseCase().execute(owner)
