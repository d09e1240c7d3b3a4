from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Literal


Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
	"""One conversation turn sent upstream."""

	role: Role
	content: str

	def to_dict(self) -> dict[str, str]:
		return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class ContentBlock:
	"""One typed unit of a model reply. Only ``type == "text"`` carries text."""

	type: str
	text: str | None = None


@dataclass(frozen=True)
class LLMReply:
	"""Provider-neutral model reply."""

	content: list[ContentBlock] = field(default_factory=list)

	def first_text(self) -> str:
		"""Return the text of the first text-typed block, or "" if there is none."""
		for block in self.content:
			if block.type == "text" and block.text is not None:
				return block.text
		return ""


class AbstractLLMClient(ABC):
	"""Interface for LLM clients that produce short text replies."""

	@abstractmethod
	async def create_message(
		self,
		*,
		system: str,
		messages: list[ChatMessage],
		max_tokens: int,
	) -> LLMReply:
		"""Send one conversation to the model and return its reply.

		Args:
			system: System instruction.
			messages: Conversation turns, in order.
			max_tokens: Upper bound on reply length.

		Returns:
			LLMReply: The reply's content blocks.

		Raises:
			LLMAppError: If the provider call fails, classified by
				UpstreamErrorKind.
		"""
		...
