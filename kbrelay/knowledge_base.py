"""Bedrock knowledge base client behind a one-method interface."""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from kbrelay.config import Settings
from kbrelay.exceptions import KnowledgeBaseError
from kbrelay.prompts import MALFORMED_CITATIONS, MALFORMED_RESPONSE, RAG_PROMPT_TEMPLATE

logger = logging.getLogger(__name__)

SERVICE_NAME = "bedrock-agent-runtime"
RETRIEVAL_TOP_K = 5


@dataclass
class KnowledgeBaseAnswer:
    answer: str
    session_id: Optional[str] = None
    citations: List[Dict[str, Any]] = field(default_factory=list)


class KnowledgeBase(Protocol):
    def retrieve_and_generate(self, query: str, session_id: Optional[str] = None) -> KnowledgeBaseAnswer:
        ...


def create_bedrock_client(settings: Settings):
    secret = settings.aws_secret_access_key
    return boto3.client(
        SERVICE_NAME,
        region_name=settings.aws_region,
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=secret.get_secret_value() if secret else None,
    )


class BedrockKnowledgeBase:
    def __init__(self, settings: Settings, client=None):
        self.knowledge_base_id = settings.knowledge_base_id
        self.model_id = settings.foundation_model_id
        self.client = client if client is not None else create_bedrock_client(settings)

        if not self.knowledge_base_id:
            logger.warning("KNOWLEDGE_BASE_ID is not set, chat requests will fail upstream")

        logger.info(
            f"Bedrock knowledge base client ready | region={settings.aws_region} | "
            f"knowledge_base_id={self.knowledge_base_id} | model={self.model_id}"
        )

    def build_request(self, query: str, session_id: Optional[str] = None) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "input": {"text": query},
            "retrieveAndGenerateConfiguration": {
                "type": "KNOWLEDGE_BASE",
                "knowledgeBaseConfiguration": {
                    "knowledgeBaseId": self.knowledge_base_id,
                    "modelArn": self.model_id,
                    "retrievalConfiguration": {
                        "vectorSearchConfiguration": {
                            "numberOfResults": RETRIEVAL_TOP_K,
                        },
                    },
                    "generationConfiguration": {
                        "promptTemplate": {
                            "textPromptTemplate": RAG_PROMPT_TEMPLATE,
                        },
                    },
                },
            },
        }
        if session_id:
            params["sessionId"] = session_id
        return params

    def retrieve_and_generate(self, query: str, session_id: Optional[str] = None) -> KnowledgeBaseAnswer:
        params = self.build_request(query, session_id)
        logger.debug(f"Calling Bedrock RetrieveAndGenerate with params: {json.dumps(params, indent=2)}")

        try:
            response = self.client.retrieve_and_generate(**params)
        except ClientError as e:
            error = e.response.get("Error", {})
            raise KnowledgeBaseError(error.get("Message") or str(e), code=error.get("Code")) from e
        except BotoCoreError as e:
            raise KnowledgeBaseError(str(e)) from e

        logger.info("Received response from Bedrock")
        logger.debug(f"Bedrock response: {json.dumps(response, indent=2, default=str)}")

        return self.parse_response(response)

    @staticmethod
    def parse_response(response: Dict[str, Any]) -> KnowledgeBaseAnswer:
        output = response.get("output")
        text = output.get("text") if isinstance(output, dict) else None
        if not isinstance(text, str):
            raise KnowledgeBaseError(MALFORMED_RESPONSE)

        citations = response.get("citations")
        if citations is None:
            citations = []
        if not isinstance(citations, list) or not all(isinstance(c, dict) for c in citations):
            raise KnowledgeBaseError(MALFORMED_CITATIONS)

        return KnowledgeBaseAnswer(
            answer=text,
            session_id=response.get("sessionId"),
            citations=citations,
        )

    def close(self):
        close = getattr(self.client, "close", None)
        if callable(close):
            close()
        logger.info("Bedrock client closed")
