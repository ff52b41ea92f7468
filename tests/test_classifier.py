"""
tests/test_classifier.py
Scoring pipeline tests. Synthetic messages only.
"""

import json

import pytest

from spamguard import classify
from spamguard.detectors.spam_classifier import (
    EMPTY_REASON,
    NO_SPAM_REASON,
    SpamClassifier,
    length_context,
    spam_category,
)
from spamguard.models.record import ClassificationInput, ClassificationResult, ContextMetrics


def _padded(prefix: str, length: int) -> str:
    """prefix followed by filler so the trimmed message is exactly `length` chars."""
    return prefix + 'x' * (length - len(prefix))


# ── EMPTY INPUT ──────────────────────────────────────────────

class TestEmptyMessage:

    @pytest.mark.parametrize('body', ['', '   ', '\n\t ', None])
    def test_empty_body_returns_zero_result(self, body):
        result = classify(body, sender='12345', keywords=['iddaa'])
        assert result.score == 0.0
        assert result.is_spam is False
        assert result.reason == EMPTY_REASON
        assert result.detection_reasons == ()
        assert result.context == ContextMetrics()

    def test_empty_reason_is_not_no_spam_reason(self):
        assert classify('').reason != NO_SPAM_REASON

    def test_non_text_body_treated_as_empty(self):
        assert classify(12345).reason == EMPTY_REASON


# ── KEYWORD SIGNAL ───────────────────────────────────────────

class TestKeywordSignal:

    def test_exact_builtin_keyword_saturates(self):
        result = classify('bahis')
        assert result.score == 1.0
        assert result.is_spam is True
        assert result.detection_reasons == (
            'Exact match: bahis',
            'keyword in short message — high risk',
        )

    def test_exact_match_after_trim_and_turkish_fold(self):
        result = classify('  BAHİS  ')
        assert result.detection_reasons[0] == 'Exact match: bahis'
        assert result.context.message_length == 5

    def test_exact_match_context_metrics(self):
        ctx = classify('bahis').context
        assert ctx.message_length == 5
        assert ctx.keyword_count == 1
        assert ctx.keyword_density == pytest.approx(20.0)
        assert ctx.length_category == 'Short'
        assert ctx.context_multiplier == 1.5
        assert ctx.context_description == 'short message — amplified spam score'

    def test_single_substring_in_long_message(self):
        body = _padded('bahis ', 200)
        result = classify(body)
        assert result.score == pytest.approx(0.21)
        assert result.is_spam is False
        assert result.detection_reasons == (
            'Spam keyword: bahis',
            'single keyword in long message — low risk',
        )
        assert result.context.length_category == 'Long'
        assert result.context.keyword_density == pytest.approx(0.5)

    def test_medium_message_has_no_context_reason(self):
        result = classify(_padded('bahis ', 100))
        assert result.score == pytest.approx(0.35)
        assert result.detection_reasons == ('Spam keyword: bahis',)
        assert result.context.context_description == 'medium message — normal spam score'

    def test_keyword_reasons_capped_at_three(self):
        result = classify('bahis kumar casino poker slot')
        keyword_reasons = [
            r for r in result.detection_reasons
            if r.startswith('Spam keyword:') or r.startswith('Exact match:')
        ]
        assert keyword_reasons == [
            'Spam keyword: bahis',
            'Spam keyword: kumar',
            'Spam keyword: casino',
        ]
        assert 'Multiple spam keywords' in result.detection_reasons
        assert result.context.keyword_count == 5
        assert result.score == 1.0

    def test_summary_reason_is_first_three(self):
        result = classify('bahis kumar casino poker slot')
        assert result.reason == 'Spam keyword: bahis, Spam keyword: kumar, Spam keyword: casino'

    def test_multiple_keyword_bonus_applied_before_multiplier(self):
        # 3 substring hits in a medium message: 3 * 0.35 + 0.2
        body = _padded('rulet poker slot ', 100)
        result = classify(body)
        assert result.context.keyword_count == 3
        assert result.score == 1.0
        long_result = classify(_padded('rulet poker slot ', 300))
        assert long_result.score == pytest.approx((3 * 0.35 + 0.2) * 0.6)

    def test_no_indicators(self):
        result = classify('merhaba nasılsın')
        assert result.score == 0.0
        assert result.is_spam is False
        assert result.reason == NO_SPAM_REASON
        assert result.context.length_category == 'Short'
        assert result.context.keyword_count == 0


class TestCustomKeywords:

    def test_custom_keyword_matches(self):
        result = classify('iddaa kuponu hazır', keywords=['iddaa'])
        assert 'Spam keyword: iddaa' in result.detection_reasons
        assert result.score == pytest.approx(0.35 * 1.5)
        assert result.is_spam is True

    def test_without_custom_keyword_not_matched(self):
        assert classify('iddaa kuponu hazır').score == 0.0

    def test_builtins_evaluated_before_custom(self):
        result = classify('iddaa ve bahis', keywords=['iddaa'])
        assert result.detection_reasons[:2] == ('Spam keyword: bahis', 'Spam keyword: iddaa')

    def test_duplicate_keywords_counted_once(self):
        body = _padded('bahis ', 60)
        plain = classify(body)
        dup = classify(body, keywords=['bahis', 'Bahis', 'BAHİS', 'bahis'])
        assert dup == plain
        assert dup.context.keyword_count == 1

    def test_unusable_keyword_entries_skipped(self):
        result = classify('iddaa kuponu hazır', keywords=[None, 5, '', '  ', b'iddaa'])
        assert result.context.keyword_count == 1

    def test_string_keywords_argument_ignored(self):
        assert classify('iddaa kuponu hazır', keywords='iddaa').score == 0.0


# ── LENGTH BOUNDARIES ────────────────────────────────────────

class TestLengthBoundaries:

    @pytest.mark.parametrize('length,category', [
        (50, 'Short'), (51, 'Medium'), (150, 'Medium'), (151, 'Long'),
    ])
    def test_category_boundaries(self, length, category):
        assert classify('x' * length).context.length_category == category

    @pytest.mark.parametrize('length,expected', [
        (50, 0.35 * 1.5), (51, 0.35), (150, 0.35), (151, 0.35 * 0.6),
    ])
    def test_multiplier_boundaries(self, length, expected):
        assert classify(_padded('bahis ', length)).score == pytest.approx(expected)

    def test_short_boundary_crosses_spam_threshold(self):
        assert classify(_padded('bahis ', 50)).is_spam is True
        assert classify(_padded('bahis ', 51)).is_spam is False

    def test_length_measured_after_trim(self):
        assert classify('   ' + 'x' * 50 + '   ').context.length_category == 'Short'

    def test_length_context_table(self):
        assert length_context(0)[0] == 'Short'
        assert length_context(151)[1] == 0.6


# ── PATTERN SIGNAL ───────────────────────────────────────────

class TestPatternSignal:

    def test_single_pattern(self):
        result = classify('Ara: +90 5551234567')
        assert result.detection_reasons == ('Suspicious pattern detected',)
        assert result.score == pytest.approx(0.15)

    def test_each_matching_pattern_adds_reason(self):
        result = classify('50% indirim www.site.com')
        assert result.detection_reasons == (
            'Suspicious pattern detected',
            'Suspicious pattern detected',
        )
        assert result.score == pytest.approx(0.3)


# ── SENDER SIGNAL ────────────────────────────────────────────

class TestSenderSignal:

    BODY = 'merhaba nasılsın'

    def test_five_digit_sender_stacks(self):
        result = classify(self.BODY, sender='12345')
        assert result.detection_reasons == (
            'Suspicious sender: 12345',
            'Short numeric sender',
        )
        assert result.score == pytest.approx(0.35)

    def test_six_digit_sender_numeric_only(self):
        result = classify(self.BODY, sender='123456')
        assert result.detection_reasons == ('Short numeric sender',)
        assert result.score == pytest.approx(0.15)

    def test_gambling_sender_id(self):
        result = classify(self.BODY, sender='BETBONUS')
        assert result.detection_reasons == ('Suspicious sender: BETBONUS',)
        assert result.score == pytest.approx(0.2)

    def test_first_sender_pattern_only(self):
        result = classify(self.BODY, sender='casinobet')
        assert result.detection_reasons.count('Suspicious sender: casinobet') == 1
        assert result.score == pytest.approx(0.2)

    @pytest.mark.parametrize('sender', [None, '', '+905321234567', 123])
    def test_benign_or_absent_sender(self, sender):
        assert classify(self.BODY, sender=sender).score == 0.0


# ── MESSAGE CHARACTERISTICS ──────────────────────────────────

class TestCharacteristics:

    def test_short_urgent(self):
        result = classify('Acele et')
        assert result.detection_reasons == ('Suspicious pattern detected', 'Short urgent message')
        assert result.score == pytest.approx(0.25)

    def test_excessive_punctuation(self):
        result = classify('Merhaba!!!')
        assert result.detection_reasons == ('Excessive punctuation',)
        assert result.score == pytest.approx(0.1)

    def test_excessive_capitals(self):
        result = classify('MERHABA DUNYA')
        assert result.detection_reasons == ('Excessive capital letters',)

    def test_capitals_ignored_for_short_text(self):
        assert classify('MERHABA').score == 0.0

    def test_all_three_fire_together(self):
        result = classify('SON FIRSAT!!!')
        assert result.detection_reasons == (
            'Short urgent message',
            'Excessive punctuation',
            'Excessive capital letters',
        )
        assert result.score == pytest.approx(0.3)


# ── AGGREGATION & PROPERTIES ─────────────────────────────────

SAMPLES = [
    ('Bedava bonus için hemen tıkla! www.bet.com', 'BETBONUS'),
    ('SON FIRSAT!!! 100 TL deneme bonusu, 1234 kod ile kayıt ol +90 5551234567', '4545'),
    ('Akşam yemeğe geliyor musun?', '+905321234567'),
    ('x' * 1000, None),
    ('\ud800 broken surrogate bahis', '\udfff'),
    (b'\xff\xfe bahis', b'12345'),
]


class TestAggregation:

    @pytest.mark.parametrize('body,sender', SAMPLES)
    def test_score_bounds_and_threshold(self, body, sender):
        result = classify(body, sender=sender)
        assert 0.0 <= result.score <= 1.0
        assert result.is_spam == (result.score >= 0.5)

    @pytest.mark.parametrize('body,sender', SAMPLES)
    def test_idempotent(self, body, sender):
        assert classify(body, sender, ['iddaa']) == classify(body, sender, ['iddaa'])

    def test_full_reason_list_exposed(self):
        result = classify(SAMPLES[1][0], sender=SAMPLES[1][1])
        assert len(result.detection_reasons) > 3
        assert result.reason == ', '.join(result.detection_reasons[:3])

    def test_classify_input_matches_classify(self, classifier):
        request = ClassificationInput('iddaa kuponu', '4545', ('iddaa',))
        assert classifier.classify_input(request) == classifier.classify('iddaa kuponu', '4545', ['iddaa'])

    def test_to_dict_is_plain_data(self):
        d = classify('bahis').to_dict()
        assert d['detection_reasons'] == ['Exact match: bahis', 'keyword in short message — high risk']
        assert d['context']['length_category'] == 'Short'

    def test_surrogate_sender_reason_encodes_as_utf8(self):
        result = classify('hello', sender='bet\ud800')
        assert 'Suspicious sender: bet?' in result.detection_reasons
        json.dumps(result.to_dict(), ensure_ascii=False).encode('utf-8')


class TestInjectedConfiguration:

    def test_generic_lowercase_diverges_on_dotted_i(self):
        assert SpamClassifier().classify('BAHİS').score == 1.0
        assert SpamClassifier(case_folder=str.lower).classify('BAHİS').score == 0.0

    def test_custom_builtin_list(self):
        clf = SpamClassifier(builtins=['promo'])
        assert clf.classify('promo').score == 1.0
        assert clf.classify('bahis').score == 0.0

    def test_candidate_keywords_order_and_dedup(self):
        clf = SpamClassifier(builtins=['a1', 'b2'])
        assert clf.candidate_keywords(['B2', 'c3', 'C3']) == ['a1', 'b2', 'c3']


# ── CATEGORY ─────────────────────────────────────────────────

def _result(score: float) -> ClassificationResult:
    return ClassificationResult(is_spam=score >= 0.5, score=score, reason='')


class TestSpamCategory:

    @pytest.mark.parametrize('score,label', [
        (1.0, 'High Risk Spam'),
        (0.8, 'High Risk Spam'),
        (0.79, 'Likely Spam'),
        (0.6, 'Likely Spam'),
        (0.55, 'Possible Spam'),
        (0.5, 'Possible Spam'),
        (0.49, 'Not Spam'),
        (0.0, 'Not Spam'),
    ])
    def test_labels(self, score, label):
        assert spam_category(_result(score)) == label

    def test_exact_keyword_is_high_risk(self):
        assert spam_category(classify('bahis')) == 'High Risk Spam'
