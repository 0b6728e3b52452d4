"""
Flow - a named, schema-validated wrapper around one prompt call

Every AI step of the quiz pipeline (summarize, generate quiz, extract PDF
text, extract URL text) is a Flow: it validates its input against a pydantic
model, renders a prompt, asks the AI service for a JSON answer and validates
that answer against the output model. Failures never escape as exceptions;
each flow decides what its fallback record looks like.
"""
import json
import re
from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, Type, TypeVar, Union

from loguru import logger
from pydantic import BaseModel, ValidationError

from quizify.core.interfaces.ai_service import AIService, AIResponse


InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)

_FENCE_RE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL | re.IGNORECASE)


def load_json_payload(text: Optional[str]) -> Any:
    """
    Decode the JSON document returned by the model

    Tolerates a surrounding ```json fence. Raises json.JSONDecodeError
    (a ValueError) when the text is not JSON.
    """
    if text is None:
        raise json.JSONDecodeError("Empty model output", "", 0)
    match = _FENCE_RE.match(text)
    if match:
        text = match.group(1)
    return json.loads(text)


class Flow(ABC, Generic[InputT, OutputT]):
    """Base class for schema-validated prompt flows"""

    name: str = "flow"
    input_model: Type[InputT]
    output_model: Type[OutputT]

    def __init__(self, ai_service: AIService):
        self.ai_service = ai_service

    async def run(self, payload: Union[InputT, dict]) -> OutputT:
        """
        Validate the input and execute the flow

        Raises:
            pydantic.ValidationError: If the payload does not match input_model
        """
        if isinstance(payload, self.input_model):
            data = payload
        else:
            data = self.input_model.model_validate(payload)

        logger.info(f"▶️ Running flow {self.name}")
        result = await self.execute(data)
        logger.debug(f"Flow {self.name} finished")
        return result

    async def execute(self, data: InputT) -> OutputT:
        """Default execution: one JSON-mode text prompt"""
        response = await self.ai_service.generate_text(self.build_prompt(data), json_output=True)
        output = self.parse_output(response)
        if output is None:
            return self.on_empty_output(response)
        return output

    def build_prompt(self, data: InputT) -> str:
        raise NotImplementedError(f"{type(self).__name__} does not build a text prompt")

    def parse_output(self, response: AIResponse) -> Optional[OutputT]:
        """Validate the model answer against output_model, None when unusable"""
        if not response.success:
            logger.error(f"Flow {self.name}: model call failed: {response.error}")
            return None
        if not response.content or not response.content.strip():
            logger.error(f"Flow {self.name}: model returned no output")
            return None
        try:
            return self.output_model.model_validate(load_json_payload(response.content))
        except (ValueError, ValidationError) as e:
            logger.error(f"Flow {self.name}: output did not conform to schema: {e}")
            return None

    @abstractmethod
    def on_empty_output(self, response: AIResponse) -> OutputT:
        """Fallback record when the model produced nothing usable"""
        pass
