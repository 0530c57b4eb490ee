"""AWS Bedrock provider implementation.

Bedrock hosts several model families behind one InvokeModel call, each
with its own request and response body. The credential is a single value
``region|access-key-id|secret-access-key``.
"""

import json
from typing import Any, Optional

import boto3

from commitmend.config import AWS_BEDROCK_CREDENTIAL_SEPARATOR, MAX_TOKENS, TEMPERATURE, LLMProvider
from commitmend.context import PromptContext
from commitmend.llm.base import BaseLLMProvider
from commitmend.llm.configuration import LLMConfiguration
from commitmend.llm.exceptions import LLMError
from commitmend.llm.parsing import parse_commit_response
from commitmend.message import CommitMessage

ANTHROPIC_BEDROCK_VERSION = "bedrock-2023-05-31"

CREDENTIAL_FORMAT_ERROR = (
    "AWS Bedrock requires the credential in the format 'region|access-key-id|secret-access-key'"
)


def parse_credentials(value: str) -> tuple[str, str, str]:
    """Split a Bedrock credential into (region, access key id, secret key).

    Raises:
        LLMError: If any of the three parts is missing.
    """
    parts = [part.strip() for part in value.split(AWS_BEDROCK_CREDENTIAL_SEPARATOR)]
    if len(parts) != 3 or not all(parts):
        raise LLMError(CREDENTIAL_FORMAT_ERROR)
    region, access_key_id, secret_access_key = parts
    return region, access_key_id, secret_access_key


def model_family(model_id: str) -> str:
    if model_id.startswith("anthropic.claude") or ".anthropic.claude" in model_id:
        return "anthropic"
    for family in ("meta.llama", "amazon.nova", "amazon.titan", "mistral"):
        if family in model_id:
            return family
    return "messages"


def build_request_body(model_id: str, system_prompt: str, user_prompt: str) -> dict[str, Any]:
    """Build the InvokeModel body for the model's family."""
    family = model_family(model_id)

    if family == "anthropic":
        return {
            "anthropic_version": ANTHROPIC_BEDROCK_VERSION,
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
            "system": system_prompt,
            "messages": [{"role": "user", "content": user_prompt}],
        }
    if family == "meta.llama":
        return {
            "prompt": (
                "<|begin_of_text|><|start_header_id|>system<|end_header_id|>\n\n"
                f"{system_prompt}<|eot_id|><|start_header_id|>user<|end_header_id|>\n\n"
                f"{user_prompt}<|eot_id|><|start_header_id|>assistant<|end_header_id|>\n\n"
            ),
            "max_gen_len": MAX_TOKENS,
            "temperature": TEMPERATURE,
        }
    if family == "amazon.nova":
        return {
            "system": [{"text": system_prompt}],
            "messages": [{"role": "user", "content": [{"text": user_prompt}]}],
            "inferenceConfig": {"max_new_tokens": MAX_TOKENS, "temperature": TEMPERATURE},
        }
    if family == "amazon.titan":
        return {
            "inputText": f"{system_prompt}\n\n{user_prompt}",
            "textGenerationConfig": {"maxTokenCount": MAX_TOKENS, "temperature": TEMPERATURE},
        }
    if family == "mistral":
        return {
            "prompt": f"<s>[INST] {system_prompt}\n\n{user_prompt} [/INST]",
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
        }
    return {
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        "max_tokens": MAX_TOKENS,
        "temperature": TEMPERATURE,
    }


def _first(items: Any) -> dict:
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return {}


def extract_response_text(model_id: str, body: dict) -> Optional[str]:
    """Pull the generated text out of a decoded InvokeModel response."""
    family = model_family(model_id)

    if family == "anthropic":
        return _first(body.get("content")).get("text")
    if family == "meta.llama":
        return body.get("generation")
    if family == "amazon.nova":
        message = (body.get("output") or {}).get("message") or {}
        return _first(message.get("content")).get("text")
    if family == "amazon.titan":
        return _first(body.get("results")).get("outputText")
    if family == "mistral":
        return _first(body.get("outputs")).get("text")

    choice = _first(body.get("choices"))
    if choice:
        return (choice.get("message") or {}).get("content")
    return body.get("content") or body.get("text") or body.get("completion")


class BedrockProvider(BaseLLMProvider):
    """Models hosted on AWS Bedrock."""

    provider = LLMProvider.AWS_BEDROCK
    display_name = "AWS Bedrock"

    def create_client(self, configuration: LLMConfiguration):
        region, access_key_id, secret_access_key = parse_credentials(self._require_api_key(configuration))
        return boto3.client(
            "bedrock-runtime",
            region_name=region,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
        )

    def generate(self, context: PromptContext, configuration: LLMConfiguration) -> CommitMessage:
        """Generate a commit message with a Bedrock-hosted model.

        Raises:
            MissingAPIKeyError: If the credential is not set.
            MalformedResponseError: If the response cannot be parsed.
            LLMError: For malformed credentials and other LLM-related errors.
        """
        client = self.create_client(configuration)
        model_id = configuration.effective_model()
        system_prompt, user_prompt = self.build_prompts(context)

        try:
            response = client.invoke_model(
                modelId=model_id,
                body=json.dumps(build_request_body(model_id, system_prompt, user_prompt)),
                contentType="application/json",
                accept="application/json",
            )
            body = json.loads(response["body"].read())
        except Exception as e:
            raise LLMError(f"AWS Bedrock API call failed: {e}")

        raw_response = extract_response_text(model_id, body) if isinstance(body, dict) else None
        if not raw_response:
            raise LLMError("No content in response from AWS Bedrock")

        return parse_commit_response(raw_response)
