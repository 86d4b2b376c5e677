from docbrief.validation.models import TextValidationError, TextValidationWarning
from docbrief.validation.text_validator import (
    get_contract_keyword_count,
    is_contract_like,
    is_english,
    is_readable_text,
    validate_extracted_text,
    validate_text_length,
)

FRENCH_TEXT = (
    "Le présent contrat de travail est conclu entre la société Dupont et Monsieur Martin. "
    "Le salarié exercera les fonctions de responsable commercial au sein de la direction des "
    "ventes. La rémunération mensuelle brute sera versée chaque fin de mois par virement "
    "bancaire. Le salarié devra respecter le règlement intérieur de l'entreprise ainsi que "
    "les consignes de sécurité. Toute modification du présent contrat fera l'objet d'un "
    "avenant écrit signé par les deux parties. En cas de litige, les tribunaux compétents "
    "seront ceux du siège social de la société."
)


class TestValidateTextLength:
    def test_accepts_exactly_minimum(self) -> None:
        assert validate_text_length("x" * 300) is True

    def test_rejects_one_below_minimum(self) -> None:
        assert validate_text_length("x" * 299) is False

    def test_surrounding_whitespace_does_not_count(self) -> None:
        assert validate_text_length("   " + "x" * 299 + "\n\n") is False


class TestIsReadableText:
    def test_plain_english_is_readable(self, contract_text: str) -> None:
        assert is_readable_text(contract_text) is True

    def test_empty_text_is_unreadable(self) -> None:
        assert is_readable_text("") is False

    def test_control_characters_make_text_unreadable(self) -> None:
        assert is_readable_text("Agreement " * 40 + "\x01" * 100) is False

    def test_few_control_characters_are_tolerated(self, contract_text: str) -> None:
        assert is_readable_text(contract_text + "\x01") is True

    def test_latin1_and_punctuation_block_count_as_printable(self) -> None:
        assert is_readable_text("café – “quoted” naïve résumé " * 20) is True

    def test_cjk_text_is_unreadable(self) -> None:
        assert is_readable_text("合同条款" * 100) is False


class TestIsEnglish:
    def test_english_prose(self, contract_text: str) -> None:
        assert is_english(contract_text) is True

    def test_french_prose(self) -> None:
        assert is_english(FRENCH_TEXT) is False

    def test_too_few_tokens(self) -> None:
        assert is_english("the agreement is in force " * 7) is False

    def test_digits_and_punctuation_are_ignored(self) -> None:
        text = "the 1st party, and the 2nd party; " * 15
        assert is_english(text) is True


class TestContractKeywords:
    def test_counts_presence_not_frequency(self) -> None:
        assert get_contract_keyword_count("agreement agreement agreement") == 1

    def test_is_case_insensitive(self) -> None:
        assert get_contract_keyword_count("AGREEMENT and Payment") == 2

    def test_parties_is_not_counted_as_party(self) -> None:
        assert get_contract_keyword_count("the parties") == 1

    def test_matches_inside_longer_words(self) -> None:
        assert get_contract_keyword_count("nonconfidential paymentless") == 2

    def test_multi_word_keyword(self) -> None:
        assert get_contract_keyword_count("The Effective Date is today") == 1

    def test_contract_like_threshold(self) -> None:
        assert is_contract_like("agreement") is False
        assert is_contract_like("agreement between each party") is True


class TestValidateExtractedText:
    def test_contract_passes(self, contract_text: str) -> None:
        result = validate_extracted_text(contract_text)
        assert result.passed
        assert result.error is None
        assert result.warning is None
        assert result.is_readable is True
        assert result.character_count == len(contract_text.strip())
        assert result.keyword_count >= 2

    def test_short_text_is_insufficient(self) -> None:
        result = validate_extracted_text("Short agreement")
        assert result.error is TextValidationError.INSUFFICIENT_TEXT
        assert result.character_count == 15

    def test_length_is_checked_first(self) -> None:
        result = validate_extracted_text("\x01\x02 texte")
        assert result.error is TextValidationError.INSUFFICIENT_TEXT

    def test_binary_text_is_unreadable(self) -> None:
        result = validate_extracted_text("Agreement " * 40 + "\x01" * 100)
        assert result.error is TextValidationError.UNREADABLE_TEXT
        assert result.is_readable is False

    def test_french_text_is_non_english(self) -> None:
        result = validate_extracted_text(FRENCH_TEXT)
        assert result.error is TextValidationError.NON_ENGLISH
        assert result.warning is None

    def test_counts_are_reported_on_hard_error(self) -> None:
        result = validate_extracted_text(FRENCH_TEXT)
        assert result.character_count == len(FRENCH_TEXT)
        assert result.keyword_count == 1
        assert result.is_readable is True

    def test_non_contract_text_warns(self, non_contract_text: str) -> None:
        result = validate_extracted_text(non_contract_text)
        assert result.error is None
        assert result.warning is TextValidationWarning.NOT_CONTRACT_LIKE
        assert result.keyword_count == 0
        assert not result.passed

    def test_single_keyword_still_warns(self, non_contract_text: str) -> None:
        result = validate_extracted_text(non_contract_text + " They signed an agreement.")
        assert result.warning is TextValidationWarning.NOT_CONTRACT_LIKE
        assert result.keyword_count == 1

    def test_keyword_check_can_be_skipped(self, non_contract_text: str) -> None:
        result = validate_extracted_text(non_contract_text, check_contract_keywords=False)
        assert result.passed
        assert result.keyword_count == 0

    def test_skipping_keywords_keeps_hard_errors(self) -> None:
        result = validate_extracted_text("Too short.", check_contract_keywords=False)
        assert result.error is TextValidationError.INSUFFICIENT_TEXT

    def test_is_pure(self, contract_text: str) -> None:
        assert validate_extracted_text(contract_text) == validate_extracted_text(contract_text)
