import pytest
from unittest.mock import MagicMock

BASIC_PLAN = (
    "Entrenamiento de Fútbol Nivel Básico\n"
    "Duración total: 40 minutos\n"
    "1. Calentamiento (5 minutos)\n"
    "Trote: Trote ligero alrededor del campo.\n"
    "2. Entrenamiento principal (30 minutos)\n"
    "Regate: Conducción de balón entre conos.\n"
    "3. Enfriamiento (5 minutos)\n"
    "Estiramiento: Estiramiento de piernas."
)

MARKDOWN_PLAN = """**Entrenamiento de Fútbol Nivel Intermedio**
**Duración total:** 60 minutos

**1️⃣ Calentamiento (10 minutos)**
- **Movilidad articular**:
- Rotaciones de tobillo y cadera.
- **Rondo 4v1**: Mantener la posesión en un cuadrado de 10x10.

**2️⃣ Entrenamiento Principal (40 minutos)**
- **Pases largos**: Parejas a 30 metros.
- Series: 3 x 5 minutos.
- **Juego de posición 5v5+2**: Campo reducido con comodines.

**3️⃣ Enfriamiento (10 minutos)**
- **Estiramientos estáticos**: 30 segundos por grupo muscular.
"""


@pytest.fixture
def basic_plan():
    return BASIC_PLAN


@pytest.fixture
def markdown_plan():
    return MARKDOWN_PLAN


@pytest.fixture
def fake_model():
    """Stand-in for genai.GenerativeModel; set .generate_content.return_value.text per test."""
    model = MagicMock()
    model.generate_content.return_value = MagicMock(text="")
    return model
