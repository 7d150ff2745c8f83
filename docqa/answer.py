import logging
from typing import Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)

FALLBACK_ANSWER = "I couldn't find an answer to your question in the document."

SYSTEM_PROMPT = "You are a helpful assistant."
MARKDOWN_PROMPT = "Respond using markdown."


class AnswerRequester:
    """
    Asks the chat completion endpoint about one chunk at a time.

    Chunks are tried in order and the first non-empty answer wins; the
    remaining chunks are never sent. API errors are left to the caller.
    """

    def __init__(self, client, model: str = "gpt-3.5-turbo", markdown: bool = False):
        self.client = client
        self.model = model
        self.markdown = markdown

    def build_messages(self, chunk: str, question: str) -> List[Dict[str, str]]:
        messages = [{"role": "system", "content": SYSTEM_PROMPT}]
        if self.markdown:
            messages.append({"role": "system", "content": MARKDOWN_PROMPT})
        messages += [
            {"role": "user", "content": chunk},
            {"role": "assistant", "content": ""},
            {"role": "user", "content": question},
        ]
        return messages

    def _answer_from(self, completion) -> Optional[str]:
        choices = getattr(completion, "choices", None)
        if not choices:
            return None
        content = (choices[0].message.content or "").strip()
        return content or None

    def ask(self, chunks: Iterable[str], question: str) -> str:
        for position, chunk in enumerate(chunks, start=1):
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=self.build_messages(chunk, question),
            )
            answer = self._answer_from(completion)
            if answer:
                logger.info("Answer found in chunk %d", position)
                return answer
            logger.debug("No answer in chunk %d", position)

        logger.info("No chunk produced an answer, returning fallback")
        return FALLBACK_ANSWER
