"""
Spending text parser for turning free-form input into transaction candidates.

Each non-blank line is parsed on its own into at most one candidate. Lines
without a positive amount are skipped rather than reported as errors.
"""

import re
import logging
from datetime import date
from typing import Iterable, List, Optional, Tuple

from app.models.transaction import ParsedTransaction, ParseResult, ParseStats
from app.services.duplicates import find_duplicate_groups
from app.utils.candidates import AmountMatch, DateMatch, create_amount_match
from app.utils.dates import find_date, numeric_date_spans, strip_dates
from app.utils.keywords import DEFAULT_KEYWORDS, KeywordConfig
from app.utils.money import CURRENCY_SYMBOL_PATTERN, CURRENCY_WORD_PATTERN, is_positive_amount, parse_money
from app.utils.patterns import PatternSpec, first_match
from app.utils.scoring import (
    classify_transaction_type,
    combined_text,
    compute_stats,
    confidence_for_category,
    suggest_category,
)

logger = logging.getLogger(__name__)

# Integer part with or without thousands separators: 1,234 or 1234
NUMBER = r'(?:\d{1,3}(?:,\d{3})+|\d+)'

FILLER_WORDS_PATTERN = re.compile(r'\b(?:at|from|to|for|on|in|the|a|an)\b', re.IGNORECASE)
MERCHANT_DELIMITER_PATTERN = re.compile(r'[,;]')
LINE_BREAK_PATTERN = re.compile(r'\r?\n')

MERCHANT_MAX_LENGTH = 100
UNKNOWN_MERCHANT = 'Unknown'
UNKNOWN_DESCRIPTION = 'Unknown transaction'


def _overlaps(span: Tuple[int, int], others: Iterable[Tuple[int, int]]) -> bool:
    start, end = span
    return any(start < other_end and other_start < end for other_start, other_end in others)


class ParseInputError(ValueError):
    """Raised when the text handed to the parser is missing or not a string."""


class SpendingTextParser:
    """Service for parsing free-form spending text into transaction candidates."""

    def __init__(self, keywords: KeywordConfig = DEFAULT_KEYWORDS):
        """
        Initialize parser.

        Args:
            keywords: Category and income keyword tables
        """
        self.keywords = keywords
        self._init_patterns()

    def _init_patterns(self):
        """Initialize regex patterns for parsing."""

        # Priority order: first pattern with a positive match wins
        self.amount_patterns: Tuple[PatternSpec, ...] = (
            PatternSpec(
                name='currency_symbol',
                pattern=r'\$\s*(' + NUMBER + r'(?:\.\d{2})?)(?!\.?\d)',
                example='$1,234.56',
                notes='Symbol prefix takes precedence over any date digits on the line; '
                      '$4.5 is left to the later patterns',
            ),
            PatternSpec(
                name='currency_word',
                pattern=r'(?<![\d.,])(' + NUMBER + r'(?:\.\d+)?)\s*(?:dollars?|usd)\b',
                example='45 dollars',
            ),
            PatternSpec(
                name='bare_number',
                pattern=r'(?<![\d.,/])(' + NUMBER + r'(?:\.\d+)?)(?![\d/])',
                example='12.50',
                notes='Last resort; occurrences inside a 11/08/2025 style date are skipped',
            ),
        )

    def parse(self, text: str, today: Optional[date] = None) -> ParseResult:
        """
        Parse a block of text, one transaction per line.

        Args:
            text: Raw user-typed or transcribed text
            today: Reference date for relative dates and defaults
                (server local date when omitted)

        Returns:
            ParseResult with candidates, stats and duplicate pairs

        Raises:
            ParseInputError: text is missing or not a string
        """
        if text is None:
            raise ParseInputError('Text input is required')
        if not isinstance(text, str):
            raise ParseInputError(f'Text input must be a string, got {type(text).__name__}')

        today = today or date.today()

        lines = self.split_lines(text)
        transactions: List[ParsedTransaction] = []

        for line in lines:
            transaction = self.parse_line(line, today)
            if transaction is not None:
                transactions.append(transaction)

        duplicate_groups = find_duplicate_groups(transactions)
        stats = compute_stats([t.confidence for t in transactions], duplicate_groups)

        logger.info("Parsed spending text", extra={
            "lines": len(lines),
            "parsed": len(transactions),
            "skipped": len(lines) - len(transactions),
            "duplicates": len(duplicate_groups),
        })

        return ParseResult(
            transactions=transactions,
            stats=ParseStats(**stats),
            duplicate_groups=duplicate_groups,
        )

    @staticmethod
    def split_lines(text: str) -> List[str]:
        """Split on line boundaries and drop blank lines."""
        return [line for line in LINE_BREAK_PATTERN.split(text) if line.strip()]

    def parse_line(self, line: str, today: date) -> Optional[ParsedTransaction]:
        """
        Parse a single line into a candidate.

        Args:
            line: One line of input
            today: Reference date

        Returns:
            ParsedTransaction, or None when the line has no positive amount
        """
        amount = self.extract_amount(line)
        if amount is None:
            logger.debug("Skipping line without amount", extra={"line": line})
            return None

        date_match = self.extract_date(line, today, amount)
        cleaned = self.clean_text(line, amount, date_match)

        merchant = self.extract_merchant(cleaned)
        description = cleaned or merchant or UNKNOWN_DESCRIPTION

        text = combined_text(description, line)
        category = suggest_category(text, self.keywords)

        return ParsedTransaction(
            amount=amount.value,
            date=date_match.iso,
            description=description,
            merchant=merchant or UNKNOWN_MERCHANT,
            suggested_category=category,
            transaction_type=classify_transaction_type(text, self.keywords),
            confidence=confidence_for_category(category),
            original_text=line,
        )

    def extract_amount(self, line: str) -> Optional[AmountMatch]:
        """
        Extract the first positive amount using the ordered amount patterns.

        Args:
            line: One line of input

        Returns:
            AmountMatch or None
        """
        date_spans = numeric_date_spans(line)

        def build(spec: PatternSpec, match: re.Match) -> Optional[AmountMatch]:
            if _overlaps(match.span(), date_spans):
                return None
            value = parse_money(match.group(1))
            if not is_positive_amount(value):
                return None
            return create_amount_match(
                value=value,
                pattern_name=spec.name,
                match_span=match.span(),
                raw_text=match.group(0),
            )

        return first_match(self.amount_patterns, line, build)

    def extract_date(self, line: str, today: date, amount: Optional[AmountMatch] = None) -> DateMatch:
        """
        Extract the first valid date expression, defaulting to today.

        The amount's characters are blanked first so "Nov 10 1500 dollars"
        cannot read 1500 as the year. Blanking keeps offsets, so the returned
        span still indexes into the original line.
        """
        if amount is not None:
            line = self._blank_spans(line, [amount.match_span])
        return find_date(line, today)

    def clean_text(self, line: str, amount: AmountMatch, date_match: DateMatch) -> str:
        """
        Strip amount, currency markers, dates and filler words from a line.

        Args:
            line: Original line
            amount: Matched amount (its span is removed)
            date_match: Matched date (its span is removed unless defaulted)

        Returns:
            Cleaned text, possibly empty
        """
        spans = [amount.match_span]
        if not date_match.is_default:
            spans.append(date_match.match_span)

        text = self._blank_spans(line, spans)
        text = CURRENCY_SYMBOL_PATTERN.sub(' ', text)
        text = CURRENCY_WORD_PATTERN.sub(' ', text)
        text = strip_dates(text)
        text = FILLER_WORDS_PATTERN.sub(' ', text)
        text = re.sub(r'\s+', ' ', text)

        return text.strip(' -,;:')

    def extract_merchant(self, cleaned: str) -> str:
        """Text before the first comma or semicolon, at most 100 characters."""
        head = MERCHANT_DELIMITER_PATTERN.split(cleaned, maxsplit=1)[0]
        return head.strip()[:MERCHANT_MAX_LENGTH].strip()

    @staticmethod
    def _blank_spans(text: str, spans: Iterable[Tuple[int, int]]) -> str:
        """Replace the characters covered by spans with spaces."""
        covered = set()
        for start, end in spans:
            covered.update(range(start, end))
        return ''.join(' ' if i in covered else ch for i, ch in enumerate(text))
