"""Tests for the transcript interpretation pipeline."""
import asyncio

import httpx
import pytest

from voice_ledger.config.categories import categories_for
from voice_ledger.interpreter import TransactionInterpreter, interpret_transcript
from voice_ledger.models import TransactionType
from voice_ledger.nlu import GeminiClient, MalformedResponseError


SALARY_RESPONSE = (
    'Here is the result: {"type":"income","amount":"5000000","category":"Salary",'
    '"description":"salary","confidence":0.95}'
)


def _interpret(interpreter, transcript):
    return asyncio.run(interpreter.interpret(transcript))


class TestOfflineInterpretation:
    """Tests with the remote service disabled."""

    def test_received_salary(self):
        parsed = _interpret(TransactionInterpreter(client=None), "received salary payment")

        assert parsed.type == TransactionType.INCOME
        assert parsed.category in ("Salary", "Other")
        assert parsed.confidence == 0.6
        assert parsed.source == "fallback"

    def test_bought_coffee(self):
        parsed = _interpret(TransactionInterpreter(client=None), "bought coffee 25000")

        assert parsed.type == TransactionType.EXPENSE
        assert parsed.amount == 25000
        assert parsed.category == "Food"
        assert parsed.confidence == 0.6

    def test_idempotent(self):
        """Test repeated interpretation gives identical output."""
        interpreter = TransactionInterpreter(client=None)
        first = _interpret(interpreter, "beli kopi 25.000")
        second = _interpret(interpreter, "beli kopi 25.000")

        assert first == second

    def test_non_string_transcript(self):
        """Test junk input still yields a result."""
        parsed = _interpret(TransactionInterpreter(client=None), None)
        assert parsed.amount == 0
        assert parsed.description == ""

    def test_is_online(self, fake_client_factory):
        assert not TransactionInterpreter(client=None).is_online
        assert TransactionInterpreter(client=fake_client_factory(response="{}")).is_online


class TestRemoteInterpretation:
    """Tests for the NLU path."""

    def test_prose_wrapped_json(self, fake_client_factory):
        client = fake_client_factory(response=SALARY_RESPONSE)
        parsed = _interpret(TransactionInterpreter(client=client), "terima gaji lima juta")

        assert parsed.type == TransactionType.INCOME
        assert parsed.amount == 5000000
        assert parsed.category == "Salary"
        assert parsed.confidence == pytest.approx(0.95)
        assert parsed.source == "nlu"

    def test_confidence_clamped(self, fake_client_factory):
        high = fake_client_factory(response='{"type":"expense","amount":1000,"confidence":1.5}')
        low = fake_client_factory(response='{"type":"expense","amount":1000,"confidence":-0.2}')

        assert _interpret(TransactionInterpreter(client=high), "x").confidence == 1.0
        assert _interpret(TransactionInterpreter(client=low), "x").confidence == 0.0

    def test_prompt_contents(self, fake_client_factory):
        """Test the prompt carries the transcript and both taxonomies."""
        client = fake_client_factory(response=SALARY_RESPONSE)
        _interpret(TransactionInterpreter(client=client), "beli kopi 25 ribu")

        prompt = client.prompts[0]
        assert 'Text: "beli kopi 25 ribu"' in prompt
        assert "Salary, Freelance, Investment, Bonus, Gift, Other" in prompt
        assert "Food, Transport, Shopping, Entertainment, Health, Education, Bills, Other" in prompt
        assert '"confidence"' in prompt

    def test_prompt_escapes_quotes(self):
        prompt = TransactionInterpreter().build_prompt('say "hi" 100')
        assert 'Text: "say \'hi\' 100"' in prompt

    def test_empty_transcript_skips_remote(self, fake_client_factory):
        client = fake_client_factory(response=SALARY_RESPONSE)
        parsed = _interpret(TransactionInterpreter(client=client), "   ")

        assert client.prompts == []
        assert parsed.source == "fallback"


class TestFallback:
    """Tests that every remote failure degrades to the heuristics."""

    def test_network_error(self, failing_client):
        parsed = _interpret(TransactionInterpreter(client=failing_client), "bought coffee 25000")

        assert parsed.source == "fallback"
        assert parsed.category == "Food"
        assert parsed.amount == 25000
        assert parsed.confidence == 0.6

    def test_malformed_response(self, fake_client_factory):
        client = fake_client_factory(response="I am not sure what you mean.")
        parsed = _interpret(TransactionInterpreter(client=client), "bayar ojek 20000")

        assert parsed.source == "fallback"
        assert parsed.category == "Transport"

    def test_client_raising_malformed(self, fake_client_factory):
        client = fake_client_factory(error=MalformedResponseError("no candidates"))
        parsed = _interpret(TransactionInterpreter(client=client), "terima bonus 1.000.000")

        assert parsed.source == "fallback"
        assert parsed.type == TransactionType.INCOME
        assert parsed.amount == 1000000

    def test_unexpected_exception(self, fake_client_factory):
        client = fake_client_factory(error=KeyError("candidates"))
        parsed = _interpret(TransactionInterpreter(client=client), "beli baju 150000")

        assert parsed.source == "fallback"
        assert parsed.category == "Shopping"

    def test_none_response(self, fake_client_factory):
        client = fake_client_factory(response=None)
        parsed = _interpret(TransactionInterpreter(client=client), "beli nasi 15000")

        assert parsed.source == "fallback"

    def test_timeout(self, fake_client_factory):
        """Test a slow service is abandoned after the timeout."""
        client = fake_client_factory(response=SALARY_RESPONSE, delay=5.0)
        interpreter = TransactionInterpreter(client=client, timeout=0.05)
        parsed = _interpret(interpreter, "bought coffee 25000")

        assert parsed.source == "fallback"
        assert parsed.category == "Food"

    def test_gemini_server_error(self):
        """Test a 500 from Gemini falls back end to end."""
        def handler(request):
            return httpx.Response(500, json={"error": "internal"})

        async def run():
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
                client = GeminiClient(api_key="k", http_client=http)
                return await TransactionInterpreter(client=client).interpret("beli kopi 25000")

        parsed = asyncio.run(run())
        assert parsed.source == "fallback"
        assert parsed.category == "Food"

    def test_gemini_success(self):
        """Test a full Gemini round trip through the interpreter."""
        def handler(request):
            return httpx.Response(200, json={
                "candidates": [{"content": {"parts": [{"text": SALARY_RESPONSE}]}}]
            })

        async def run():
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
                client = GeminiClient(api_key="k", http_client=http)
                return await TransactionInterpreter(client=client).interpret("terima gaji")

        parsed = asyncio.run(run())
        assert parsed.source == "nlu"
        assert parsed.amount == 5000000


class TestInvariants:
    """Tests that hold for every transcript, online or not."""

    @pytest.mark.parametrize("response", [
        SALARY_RESPONSE,
        '{"type":"income","category":"Food","confidence":7}',
        '{"type":"expense","category":"Gaji","amount":"abc"}',
        '{"type": null, "category": 5, "confidence": "??"}',
        "no json at all",
        "",
    ])
    @pytest.mark.parametrize("transcript", [
        "received salary payment",
        "beli kopi 25.000",
        "",
    ])
    def test_category_and_confidence(self, fake_client_factory, response, transcript):
        client = fake_client_factory(response=response)
        parsed = _interpret(TransactionInterpreter(client=client), transcript)

        assert 0.0 <= parsed.confidence <= 1.0
        assert parsed.category in categories_for(parsed.type)
        assert parsed.amount >= 0


class TestHelpers:
    """Tests for the convenience entry points."""

    def test_interpret_transcript(self):
        parsed = asyncio.run(interpret_transcript("bought coffee 25000"))
        assert parsed.category == "Food"

    def test_interpret_sync(self):
        parsed = TransactionInterpreter(client=None).interpret_sync("bayar listrik 350.000")
        assert parsed.category == "Bills"
        assert parsed.amount == 350000

    def test_concurrent_calls(self, fake_client_factory):
        """Test one interpreter serves concurrent utterances."""
        client = fake_client_factory(response=SALARY_RESPONSE)
        interpreter = TransactionInterpreter(client=client)

        async def run():
            return await asyncio.gather(
                interpreter.interpret("a"),
                interpreter.interpret("b"),
                interpreter.interpret("c"),
            )

        results = asyncio.run(run())
        assert [r.amount for r in results] == [5000000] * 3
        assert len(client.prompts) == 3
