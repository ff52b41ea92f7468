"""
tests/test_patterns.py
One test group per suspicious pattern, plus sender and known-number rules.
"""

import pytest

from spamguard.detectors.patterns import (
    HIGH_RISK_SENDER_PATTERNS,
    PATTERN_SET_VERSION,
    SHORT_NUMERIC_SENDER,
    SUSPICIOUS_PATTERNS,
    is_known_spam_number,
)


def _matches(name: str, text: str) -> bool:
    return SUSPICIOUS_PATTERNS[name].search(text) is not None


class TestSuspiciousPatterns:

    def test_pattern_set_shape(self):
        assert PATTERN_SET_VERSION
        assert set(SUSPICIOUS_PATTERNS) == {
            'currency_amount', 'url', 'percentage',
            'action_word', 'promo_code', 'intl_number',
        }

    @pytest.mark.parametrize('text,hit', [
        ('Hesabınıza 500 TL yatırıldı', True),
        ('100₺ hediye', True),
        ('50 lira kazandınız', True),
        ('250tl bonus', True),
        ('5 TL', False),
        ('TL 500', False),
    ])
    def test_currency_amount(self, text, hit):
        assert _matches('currency_amount', text) is hit

    @pytest.mark.parametrize('text,hit', [
        ('giriş: www.example.com', True),
        ('https://example.com', True),
        ('HTTP://EXAMPLE.COM', True),
        ('merhaba dünya', False),
    ])
    def test_url(self, text, hit):
        assert _matches('url', text) is hit

    @pytest.mark.parametrize('text,hit', [
        ('50% indirim', True),
        ('100 % bonus', True),
        ('%50 indirim', False),
        ('5% oran', False),
    ])
    def test_percentage(self, text, hit):
        assert _matches('percentage', text) is hit

    @pytest.mark.parametrize('text,hit', [
        ('Hemen tıkla', True),
        ('TIKLA kazan', True),
        ('kayıt ol', True),
        ('KAYIT OL', True),
        ('tikla', True),
        ('Acele edin', True),
        ('BONUS', True),
        ('toplantı yarın', False),
    ])
    def test_action_word(self, text, hit):
        assert _matches('action_word', text) is hit

    @pytest.mark.parametrize('text,hit', [
        ('1234 kod ile', True),
        ('5678KOD', True),
        ('123 kod', False),
        ('kod 1234', False),
    ])
    def test_promo_code(self, text, hit):
        assert _matches('promo_code', text) is hit

    @pytest.mark.parametrize('text,hit', [
        ('+90 5551234567', True),
        ('+1 555', True),
        ('+44', False),
        ('05551234567', False),
    ])
    def test_intl_number(self, text, hit):
        assert _matches('intl_number', text) is hit


class TestSenderPatterns:

    @pytest.mark.parametrize('sender,hit', [
        ('1234', True),
        ('12345', True),
        ('123456', False),
        ('superbonus', True),
        ('betway', True),
        ('mycasino', True),
        ('annem', False),
    ])
    def test_high_risk(self, sender, hit):
        assert any(p.fullmatch(sender) for p in HIGH_RISK_SENDER_PATTERNS) is hit

    @pytest.mark.parametrize('sender,hit', [
        ('1234', True),
        ('123456', True),
        ('123', False),
        ('1234567', False),
        ('12a4', False),
        ('١٢٣٤', False),   # non-ASCII digits
    ])
    def test_short_numeric(self, sender, hit):
        assert (SHORT_NUMERIC_SENDER.fullmatch(sender) is not None) is hit


class TestKnownSpamNumber:

    @pytest.mark.parametrize('number,hit', [
        ('08501234567', True),
        ('4441234', True),
        ('1234', True),
        ('12345', False),
        ('+905321234567', False),
        ('', False),
        (None, False),
    ])
    def test_known_numbers(self, number, hit):
        assert is_known_spam_number(number) is hit
