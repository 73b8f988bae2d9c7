"""
Unit tests for the text classifiers.

Covers category detection, affirmative/negative detection, name
extraction and email validation.
"""

import re

import pytest

from services.detection import (
    GENERAL_CATEGORY,
    CategoryDetector,
    ConfirmationDetector,
    detect_category,
    is_affirmative,
    is_negative,
)
from services.extraction import NameExtractor, extract_name
from services.validation import EmailValidator, is_valid_email, normalize_email, parse_email


class TestCategoryDetector:
    """Tests for keyword based category detection."""

    def test_detecta_cuenta(self):
        assert detect_category("I can't login, forgot my password") == "account"

    def test_detecta_facturacion(self):
        assert detect_category("I was charged twice for my subscription") == "billing"

    def test_sin_coincidencias_es_general(self):
        assert detect_category("hello there") == GENERAL_CATEGORY

    def test_texto_vacio_es_general(self):
        assert detect_category("") == GENERAL_CATEGORY
        assert detect_category(None) == GENERAL_CATEGORY

    def test_empate_gana_la_primera_categoria(self):
        """'bug' belongs to technical and bug_report; technical is declared first."""
        assert detect_category("bug") == "technical"

    def test_mayor_cantidad_de_coincidencias_gana(self):
        texto = "I get an error message and the page freezes"
        conteo = CategoryDetector().count_matches(texto)

        assert conteo["technical"] == 2
        assert conteo["bug_report"] == 1
        assert detect_category(texto) == "technical"

    def test_coincidencia_insensible_a_mayusculas(self):
        assert detect_category("REFUND PLEASE") == "billing"

    def test_lexico_inyectado(self):
        detector = CategoryDetector({"shipping": ("parcel", "delivery")})

        assert detector.detect("my parcel never arrived") == "shipping"
        assert detector.detect("my invoice is wrong") == GENERAL_CATEGORY


class TestConfirmationDetector:
    """Tests for affirmative and negative detection."""

    @pytest.mark.parametrize(
        "texto",
        ["yes", "Yes, create the ticket", "  OK  ", "sounds good to me", "Yes, that's correct"],
    )
    def test_afirmativas(self, texto):
        assert is_affirmative(texto)

    @pytest.mark.parametrize(
        "texto",
        ["no", "No, let me modify something", "nope", "hold on", "No, different category"],
    )
    def test_negativas(self, texto):
        assert is_negative(texto)

    def test_entrada_vacia_no_coincide(self):
        assert not is_affirmative("")
        assert not is_affirmative("   ")
        assert not is_negative("")

    def test_coincidencia_por_subcadena(self):
        """Matching is by substring, so one input may match both lists."""
        assert is_affirmative("I know")
        assert is_negative("I know")

    def test_texto_neutro(self):
        assert not is_affirmative("billing")
        assert not is_negative("billing")

    def test_frases_inyectadas(self):
        detector = ConfirmationDetector(affirmative_phrases=("si",), negative_phrases=("nel",))

        assert detector.is_affirmative("si")
        assert not detector.is_affirmative("yes")
        assert detector.is_negative("nel")


class TestNameExtractor:
    """Tests for name extraction from free text."""

    def test_nombre_directo(self):
        resultado = extract_name("John Smith")

        assert resultado.name == "John Smith"
        assert resultado.is_sentence is False
        assert resultado.needs_clarification is False

    def test_nombre_dentro_de_oracion(self):
        resultado = extract_name("Hi, my name is John and I need help")

        assert resultado.name == "John"
        assert resultado.is_sentence is True
        assert resultado.needs_clarification is True

    def test_oracion_sin_nombre(self):
        resultado = extract_name("I need help with my account please")

        assert resultado.name == ""
        assert resultado.is_sentence is True
        assert resultado.needs_clarification is True

    def test_nombre_demasiado_corto(self):
        resultado = extract_name("A")

        assert resultado.name == "A"
        assert resultado.needs_clarification is True

    def test_mas_de_tres_palabras_es_oracion(self):
        assert NameExtractor().is_sentence("Maria Jose Garcia Lopez")
        assert not NameExtractor().is_sentence("Maria Jose Garcia")

    def test_limpia_caracteres_no_validos(self):
        assert extract_name("John@Smith").name == "JohnSmith"

    def test_trunca_nombre_directo(self):
        assert len(extract_name("A" * 60).name) == 50

    def test_conserva_guiones_y_apostrofes(self):
        assert extract_name("Anne-Marie O'Neil").name == "Anne-Marie O'Neil"


class TestEmailValidator:
    """Tests for structural email validation."""

    @pytest.mark.parametrize("email", ["alice@example.com", " Alice@Example.COM ", "a.b+c@d.co"])
    def test_emails_validos(self, email):
        assert is_valid_email(email)

    @pytest.mark.parametrize("email", ["not-an-email", "a@b", "a b@c.de", "@example.com", ""])
    def test_emails_invalidos(self, email):
        assert not is_valid_email(email)

    def test_parse_normaliza(self):
        assert parse_email(" Alice@Example.COM ") == "alice@example.com"
        assert normalize_email(" X@Y.Z ") == "x@y.z"

    def test_parse_invalido_retorna_none(self):
        assert parse_email("alice at example") is None

    def test_patron_inyectado(self):
        validador = EmailValidator(re.compile(r"^[^@]+@corp\.com$"))

        assert validador.validate("Bob@Corp.com") == "bob@corp.com"
        assert validador.validate("bob@example.com") is None
