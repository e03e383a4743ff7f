"""
LangChain tools over the venue planning engine
"""
import json
from typing import Any, Dict

from langchain_core.tools import Tool

from agents.function_calls import FUNCTION_DEFINITIONS, execute_function
from config import config
from utils.logger import get_component_logger

logger = get_component_logger("langchain_venue_tools")

class VenueAssistantTools:
    """
    Tools for one assistant conversation about one property.

    Each tool takes the JSON action input an agent produces and returns a JSON
    string. Calls beyond the configured budget are refused.
    """

    def __init__(self, session, property_id: int, max_calls: int = None):
        self.session = session
        self.property_id = property_id
        self.max_calls = max_calls if max_calls is not None else config.assistant.max_function_calls
        self.calls_made = 0

        self.tools = [
            Tool(
                name=definition["name"],
                func=self._make_tool_func(definition["name"]),
                description=f'{definition["description"]}. Expects JSON input with: '
                            f'{", ".join(definition["parameters"]["properties"])}.'
            )
            for definition in FUNCTION_DEFINITIONS
        ]

    def _make_tool_func(self, function_name: str):
        def run(action_input: str) -> str:
            return self.call(function_name, action_input)
        return run

    def call(self, function_name: str, action_input) -> str:
        """Run one function call and return the JSON-encoded result"""
        if self.calls_made >= self.max_calls:
            logger.warning("Function call budget exhausted", function=function_name, max_calls=self.max_calls)
            return json.dumps({"error": f"Function call limit of {self.max_calls} reached for this conversation"})

        self.calls_made += 1
        result: Dict[str, Any] = execute_function(self.session, self.property_id, function_name, action_input)
        return json.dumps(result, default=str)

    def get_tool(self, name: str) -> Tool:
        for tool in self.tools:
            if tool.name == name:
                return tool
        raise KeyError(name)
