"""
Tests for the session controller: submission lifecycle, fan-out to caches,
error handling and the user actions around the result.
"""
from unittest.mock import Mock

import pytest
import requests

from conftest import make_response
from haptics import NullHaptics
from models import Err, ErrorKind, HistoryEntry, Ok, PredictionResult, Query, Sentiment
from network import SERVICE_FALLBACK_MESSAGE, TRANSPORT_FALLBACK_MESSAGE
from notifications import CELEBRATION, COPY_CONFIRMATION
from request_controller import EXAMPLE_WORDS, RequestController


SUNSHINE = {"emoji": "☀️", "sentiment": "positive", "confidence": 0.92}
RAIN = {"emoji": "🌧️", "sentiment": "negative", "confidence": 0.6}


def respond_per_word(session, sentiment="neutral"):
    """Every request succeeds with the same verdict."""
    session.post.side_effect = lambda url, json, **kwargs: make_response(
        200, {"emoji": "🙂", "sentiment": sentiment, "confidence": 0.5}
    )


class TestEmptyInput:

    @pytest.mark.parametrize("word", ["", "   ", "\t\n"])
    def test_blank_submission_is_noop(self, controller, session, word):
        seen = []
        controller.subscribe(seen.append)
        before = controller.snapshot()

        after = controller.submit(word)

        session.post.assert_not_called()
        assert seen == []
        assert after == before
        assert after.loading is False

    def test_begin_submit_returns_none(self, controller):
        assert controller.begin_submit("  ") is None


class TestSuccessfulSubmission:

    def test_sunshine_fans_out(self, controller, session, haptics):
        session.post.return_value = make_response(200, SUNSHINE)

        snap = controller.submit("sunshine")

        expected = PredictionResult("☀️", Sentiment.POSITIVE, 0.92)
        assert snap.result == expected
        assert snap.history[0] == HistoryEntry(
            word="sunshine",
            emoji="☀️",
            sentiment=Sentiment.POSITIVE,
            confidence=0.92,
            timestamp="12:30:45",
        )
        assert snap.recent_words[0] == "sunshine"
        assert snap.celebration is True
        assert snap.loading is False
        assert snap.error == ""
        assert haptics.patterns == [[50, 30, 50]]

    def test_rain_does_not_celebrate(self, controller, session, haptics):
        session.post.return_value = make_response(200, RAIN)

        snap = controller.submit("rain")

        assert snap.result.emoji == "🌧️"
        assert snap.flags[CELEBRATION] is False
        assert haptics.patterns == [[50, 30, 50]]

    def test_canonical_sent_raw_kept(self, controller, session):
        session.post.return_value = make_response(200, SUNSHINE)

        snap = controller.submit("  SunShine ")

        assert session.post.call_args.kwargs["json"] == {"word": "sunshine"}
        assert snap.history[0].word == "SunShine"
        assert snap.recent_words == ("SunShine",)
        assert snap.word == "  SunShine "

    def test_resubmit_promotes_recent_word(self, controller, session):
        respond_per_word(session)
        for word in ("sunshine", "rain", "coffee"):
            controller.submit(word)

        snap = controller.submit("sunshine")

        assert snap.recent_words == ("sunshine", "coffee", "rain")
        assert len(snap.history) == 4

    def test_eleven_submissions_cap_history(self, controller, session):
        respond_per_word(session)
        words = [f"word{i}" for i in range(11)]
        for word in words:
            snap = controller.submit(word)

        assert len(snap.history) == 10
        assert "word0" not in [entry.word for entry in snap.history]
        assert snap.history[0].word == "word10"

    def test_six_submissions_cap_recent_words(self, controller, session):
        respond_per_word(session)
        for word in ("a", "b", "c", "d", "e", "f"):
            snap = controller.submit(word)

        assert len(snap.recent_words) == 5
        assert "a" not in snap.recent_words

    def test_positive_rate_follows_history(self, controller, session):
        responses = iter([SUNSHINE, SUNSHINE, SUNSHINE, RAIN])
        session.post.side_effect = lambda *a, **kw: make_response(200, next(responses))

        for word in ("a", "b", "c", "d"):
            snap = controller.submit(word)

        assert snap.positive_rate == 75


class TestLifecycle:

    def test_loading_published_while_in_flight(self, controller, session):
        seen = []
        controller.subscribe(seen.append)
        session.post.return_value = make_response(200, SUNSHINE)

        controller.submit("sunshine")

        assert [snap.loading for snap in seen] == [True, False]
        assert seen[0].result is None
        assert seen[0].can_submit is False

    def test_new_submission_clears_previous_result_and_error(self, controller, session):
        session.post.return_value = make_response(200, SUNSHINE)
        controller.submit("sunshine")
        controller.error = "stale"

        query = controller.begin_submit("rain")

        assert query == Query(raw="rain", canonical="rain")
        assert controller.result_store.current is None
        assert controller.error == ""
        assert controller.loading is True

    def test_split_submission(self, controller, session):
        query = controller.begin_submit("sunshine")
        snap = controller.complete_submit(query, Ok(PredictionResult("☀️", Sentiment.POSITIVE, 0.92)))

        session.post.assert_not_called()
        assert snap.result.emoji == "☀️"
        assert snap.loading is False

    def test_unsubscribe(self, controller):
        seen = []
        unsubscribe = controller.subscribe(seen.append)
        unsubscribe()
        controller.set_input("x")
        assert seen == []


class TestFailures:

    def test_service_error_leaves_stores_untouched(self, controller, session):
        session.post.return_value = make_response(200, SUNSHINE)
        controller.submit("sunshine")
        before = controller.snapshot()

        session.post.return_value = make_response(400, {"error": "word too short"})
        snap = controller.submit("a")

        assert snap.error == "word too short"
        assert snap.loading is False
        assert snap.history == before.history
        assert snap.recent_words == before.recent_words
        # the result was cleared when the submission started, not replaced
        assert snap.result is None

    def test_service_error_without_message(self, controller, session):
        session.post.return_value = make_response(500, invalid_json=True)

        assert controller.submit("x").error == SERVICE_FALLBACK_MESSAGE

    def test_transport_error(self, controller, session):
        session.post.side_effect = requests.ConnectionError("refused")

        snap = controller.submit("sunshine")

        assert snap.error == TRANSPORT_FALLBACK_MESSAGE
        assert snap.loading is False
        assert snap.history == ()
        assert snap.recent_words == ()

    def test_unexpected_exception_is_caught(self, notifications, capsys):
        client = Mock()
        client.predict.side_effect = RuntimeError("boom")
        controller = RequestController(client, notifications)

        snap = controller.submit("sunshine")

        assert snap.error == TRANSPORT_FALLBACK_MESSAGE
        assert snap.loading is False
        assert "boom" in capsys.readouterr().out

    def test_can_resubmit_after_error(self, controller, session):
        session.post.return_value = make_response(400, {"error": "nope"})
        controller.submit("x")

        session.post.return_value = make_response(200, SUNSHINE)
        snap = controller.submit("sunshine")

        assert snap.error == ""
        assert snap.result is not None

    def test_error_does_not_celebrate_or_pulse(self, controller, haptics):
        query = controller.begin_submit("sunshine")
        snap = controller.complete_submit(query, Err(ErrorKind.SERVICE, "down"))

        assert snap.celebration is False
        assert haptics.patterns == []


class TestUserActions:

    def test_copy_uses_current_input_word(self, controller, session, clipboard):
        session.post.return_value = make_response(200, SUNSHINE)
        controller.submit("sunshine")

        text = controller.copy_result()

        assert text == "sunshine = ☀️ positive (92%)"
        assert clipboard.texts == [text]
        assert controller.snapshot().copy_confirmation is True

    def test_copy_without_result_is_noop(self, controller, clipboard):
        assert controller.copy_result() is None
        assert clipboard.texts == []
        assert controller.snapshot().flags[COPY_CONFIRMATION] is False

    def test_copy_confirmation_expires(self, controller, session, scheduler):
        session.post.return_value = make_response(200, SUNSHINE)
        controller.submit("sunshine")
        controller.copy_result()

        scheduler.advance(2000)

        assert controller.snapshot().copy_confirmation is False

    def test_set_input_clears_error(self, controller):
        controller.error = "word too short"

        snap = controller.set_input("sun")

        assert snap.word == "sun"
        assert snap.error == ""
        assert snap.can_submit is True

    def test_clear_input(self, controller, session):
        session.post.return_value = make_response(200, SUNSHINE)
        controller.submit("sunshine")

        snap = controller.clear_input()

        assert snap.word == ""
        assert snap.result is None
        assert snap.can_submit is False
        assert len(snap.history) == 1

    def test_choose_word_fills_input_without_submitting(self, controller, session):
        snap = controller.choose_word(EXAMPLE_WORDS[0])

        assert snap.word == "sunshine"
        session.post.assert_not_called()

    def test_choose_word_keeps_error(self, controller):
        controller.error = "word too short"

        snap = controller.choose_word("rain")

        assert snap.word == "rain"
        assert snap.error == "word too short"

    def test_clear_history_also_clears_recent_words(self, controller, session):
        respond_per_word(session, "positive")
        controller.submit("love")

        snap = controller.clear_history()

        assert snap.history == ()
        assert snap.recent_words == ()
        assert snap.positive_rate == 0

    def test_clear_recent_words_keeps_history(self, controller, session):
        respond_per_word(session)
        controller.submit("love")

        snap = controller.clear_recent_words()

        assert snap.recent_words == ()
        assert len(snap.history) == 1

    def test_toggle_history(self, controller):
        assert controller.toggle_history().show_history is True
        assert controller.toggle_history().show_history is False

    def test_example_words(self):
        assert len(EXAMPLE_WORDS) == 10
        assert "excitement" in EXAMPLE_WORDS


class TestSnapshotStats:

    def test_sentiment_counts(self, controller, session):
        session.post.return_value = make_response(200, SUNSHINE)
        controller.submit("sunshine")
        session.post.return_value = make_response(200, RAIN)
        snap = controller.submit("rain")

        assert snap.sentiment_counts == {
            Sentiment.POSITIVE: 1,
            Sentiment.NEUTRAL: 0,
            Sentiment.NEGATIVE: 1,
        }
        assert snap.positive_rate == 50


class TestWithoutHaptics:

    def test_defaults_to_null_haptics(self, client, notifications, clipboard):
        controller = RequestController(client, notifications, clipboard=clipboard)

        assert isinstance(controller.haptics, NullHaptics)
        assert controller.side_effects.haptics is controller.haptics
        assert controller.exporter.haptics is controller.haptics

    def test_submit_and_copy_without_haptics(self, client, session, notifications, clipboard):
        session.post.return_value = make_response(200, SUNSHINE)
        controller = RequestController(client, notifications, clipboard=clipboard)

        snap = controller.submit("sunshine")
        text = controller.copy_result()

        assert snap.celebration is True
        assert clipboard.texts == [text]
