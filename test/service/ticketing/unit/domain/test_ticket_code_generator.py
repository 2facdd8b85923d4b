import pytest

from src.platform.exception.exceptions import DomainError
from src.service.ticketing.domain.ticket_code_generator import (
    TICKET_CODE_ALPHABET,
    TicketCodeGenerator,
    normalize_ticket_code,
)


@pytest.mark.unit
class TestTicketCodeGenerator:
    def test_codes_use_unambiguous_alphabet(self) -> None:
        generator = TicketCodeGenerator()

        codes = generator.generate_batch(200)

        for code in codes:
            assert len(code) == 8
            assert TicketCodeGenerator.is_well_formed(code)
        assert not set(''.join(codes)) & {'0', 'O', '1', 'I'}

    def test_batch_is_distinct_and_avoids_excluded_codes(self) -> None:
        # Arrange: a one-symbol code space with most symbols taken
        generator = TicketCodeGenerator(length=1)
        taken = set(TICKET_CODE_ALPHABET[:-3])

        # Act
        codes = generator.generate_batch(3, exclude=taken)

        # Assert
        assert sorted(codes) == sorted(TICKET_CODE_ALPHABET[-3:])

    def test_configured_length(self) -> None:
        assert len(TicketCodeGenerator(length=12).generate()) == 12

    def test_non_positive_length_rejected(self) -> None:
        with pytest.raises(DomainError):
            TicketCodeGenerator(length=0)

    def test_normalize_strips_and_uppercases(self) -> None:
        assert normalize_ticket_code('  abcd2345\n') == 'ABCD2345'

    def test_is_well_formed_rejects_lookalikes(self) -> None:
        assert not TicketCodeGenerator.is_well_formed('ABCD0O1I')
        assert not TicketCodeGenerator.is_well_formed('')
