from preferences import FreeTextPreferences, StructuredPreferences

PLAN_FORMAT_INSTRUCTIONS = """
    Instrucciones de formato para tu respuesta:
    - La salida debe ser texto plano, claro y legible.
    - NO uses NINGÚN caracter de formato como asteriscos, guiones, emojis o markdown.
    - Presenta el plan de manera ordenada con títulos y subtítulos claros, usando solo texto.
    - Sigue EXACTAMENTE la estructura del siguiente ejemplo.

    Ejemplo de formato de salida:

    Entrenamiento de Fútbol Nivel [Nivel]
    Duración total: [Duración en minutos]

    1. Calentamiento ([Duración] minutos)
    [Nombre del Ejercicio 1]: [Descripción breve y clara del ejercicio].
    [Nombre del Ejercicio 2]: [Descripción breve y clara del ejercicio].

    2. Entrenamiento principal ([Duración] minutos)
    [Nombre del Ejercicio 1]: [Descripción detallada y específica del ejercicio].
    [Nombre del Ejercicio 2]: [Descripción detallada y específica del ejercicio].
    [Nombre del Ejercicio 3]: [Descripción detallada y específica del ejercicio].

    3. Enfriamiento ([Duración] minutos)
    [Nombre del Ejercicio 1]: [Descripción breve y clara del ejercicio].
    [Nombre del Ejercicio 2]: [Descripción breve y clara del ejercicio].
"""

SQUAD_GUIDELINES = """
        - Si el tamaño es 'Solo', enfócate en habilidades técnicas individuales, control del balón y condición física.
        - Si es 'Grupo Pequeño' (2-6 jugadores), incluye ejercicios de pases, duelos 1v1 o 2v2 y pequeñas combinaciones.
        - Si es 'Equipo' (7+ jugadores), diseña ejercicios tácticos, juegos de posición y simulaciones de partido."""

GROUP_GUIDELINES = """
        - Si es 'Solo', enfócate en habilidades técnicas individuales, control del balón y condición física.
        - Si es 'En Grupo', incluye ejercicios de pases, duelos, juegos reducidos y combinaciones colectivas."""

SVG_SPECIFICATION = """
    Especificaciones para el SVG (estilo profesional y claro, inspirado en diagramas tácticos de élite):
    1.  **Canvas**: Usa un viewBox="0 0 400 250".
    2.  **Campo**: Un rectángulo verde vibrante como fondo: <rect width="400" height="250" fill="#4CAF50" />. Dibuja las líneas esenciales del campo en blanco (stroke="#FFF", stroke-width="2", fill="none"), como el área de penalti en un lado y la línea de medio campo.
    3.  **Jugadores**: Representa a los jugadores con círculos <circle cx="..." cy="..." r="9" />.
        -   Equipo 1 (atacantes/principales): fill="#42A5F5" (azul), stroke="#000" stroke-width="1".
        -   Equipo 2 (defensores/asistentes): fill="#EF5350" (rojo), stroke="#000" stroke-width="1".
        -   Comodines/Neutrales: fill="#FFEB3B" (amarillo), stroke="#000" stroke-width="1".
    4.  **Material**:
        -   **Balón**: Un círculo blanco (r="6") con borde negro (stroke="#000" stroke-width="1").
        -   **Conos/Marcadores**: Pequeños triángulos de color naranja: <polygon points="x,y x+5,y-10 x+10,y" fill="#FF9800" />.
    5.  **Movimientos** (usa <defs> para las puntas de flecha):
        -   **Recorrido del jugador (sin balón)**: Flechas continuas, blancas o negras. stroke-width="2".
        -   **Conducción del jugador (con balón)**: Flechas en zigzag o sinuosas, continuas, blancas. stroke-width="2".
        -   **Pase de balón**: Flechas discontinuas amarillas (#FFEB3B). stroke-width="2", stroke-dasharray="5,5".
    6.  **Texto**: Incluye el nombre del ejercicio en la esquina superior izquierda con <text x="10" y="20" font-family="sans-serif" font-size="14" font-weight="bold" fill="white">[Nombre del Ejercicio]</text>.
    7.  **Claridad**: Los elementos no deben superponerse de manera confusa."""

NAMED_OUTPUT_FORMAT = """
    Formato de Salida:
    Devuelve una única respuesta JSON con un objeto que tenga una única clave "diagrams". El valor de "diagrams" debe ser un ARRAY de objetos con dos claves: "name" (el nombre EXACTO del ejercicio que te proporcioné) y "svg" (el código SVG completo)."""

POSITIONAL_OUTPUT_FORMAT = """
    Formato de Salida:
    Devuelve una única respuesta JSON con un objeto que tenga una única clave "diagrams". El valor de "diagrams" debe ser un ARRAY de cadenas, una por ejercicio, cada una con el código SVG completo. El array debe tener EXACTAMENTE {count} elementos y respetar el MISMO ORDEN de la lista de ejercicios."""

NAMED_DIAGRAM_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "diagrams": {
            "type": "ARRAY",
            "description": "Un array de objetos, donde cada objeto representa un diagrama de ejercicio.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING", "description": "El nombre del ejercicio."},
                    "svg": {"type": "STRING", "description": "El código SVG del diagrama."},
                },
                "required": ["name", "svg"],
            },
        }
    },
    "required": ["diagrams"],
}

POSITIONAL_DIAGRAM_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "diagrams": {
            "type": "ARRAY",
            "description": "Un array de códigos SVG en el mismo orden que los ejercicios recibidos.",
            "items": {"type": "STRING"},
        }
    },
    "required": ["diagrams"],
}


def build_plan_prompt(preferences):
    """Natural-language instruction for the plan request, one per preference variant."""
    if isinstance(preferences, FreeTextPreferences):
        return _free_text_prompt(preferences)
    if isinstance(preferences, StructuredPreferences):
        return _structured_prompt(preferences)
    raise TypeError(f"Unsupported preferences: {type(preferences).__name__}")


def _free_text_prompt(preferences):
    return f"""
    Eres un entrenador de fútbol profesional de élite. Tu tarea es generar un plan de entrenamiento personalizado basado en la descripción que el usuario te da y el tamaño del grupo.

    Instrucciones para ti, el AI Coach:
    1.  Analiza la descripción del usuario y el tamaño del grupo para el que se entrena.
    2.  Adapta los ejercicios al tamaño del grupo:{SQUAD_GUIDELINES}
    3.  Infiere el nivel de dificultad (Básico, Intermedio, Avanzado) y una duración apropiada del entrenamiento basándote en la descripción del usuario.
    4.  Genera un plan de entrenamiento completo y coherente que incluya Calentamiento, Entrenamiento principal y Enfriamiento.
    5.  La duración de cada fase debe ser proporcional a la duración total que estimes.
    6.  Los ejercicios deben ser específicos y alineados con los objetivos del usuario y el tamaño del grupo.

    Datos del Entrenamiento:
    Descripción del usuario: "{preferences.description}"
    Tamaño del grupo: {preferences.group_size.value}
{PLAN_FORMAT_INSTRUCTIONS}"""


def _structured_prompt(preferences):
    return f"""
    Eres un entrenador de fútbol profesional de élite. Tu tarea es generar un plan de entrenamiento personalizado a partir de las preferencias que el usuario eligió paso a paso.

    Instrucciones para ti, el AI Coach:
    1.  Respeta exactamente el tipo de entrenamiento, la dificultad y la duración total indicados.
    2.  Adapta los ejercicios al tamaño del grupo:{GROUP_GUIDELINES}
    3.  Genera un plan de entrenamiento completo y coherente que incluya Calentamiento, Entrenamiento principal y Enfriamiento.
    4.  La suma de las duraciones de las fases debe ser igual a {preferences.duration} minutos.
    5.  Los ejercicios deben ser específicos y adecuados al nivel {preferences.difficulty.value}.

    Datos del Entrenamiento:
    Tipo de entrenamiento: {preferences.training_type.value}
    Dificultad: {preferences.difficulty.value}
    Duración total: {preferences.duration} minutos
    Tamaño del grupo: {preferences.group_size.value}
{PLAN_FORMAT_INSTRUCTIONS}"""


def build_diagram_prompt(exercises, named=False):
    """Prompt listing the main-phase exercises as ``name: description`` lines."""
    listing = "\n".join(
        f"{name}: {' '.join(description.splitlines())}" if description else name
        for name, description in exercises
    )
    if named:
        output_format = NAMED_OUTPUT_FORMAT
    else:
        output_format = POSITIONAL_OUTPUT_FORMAT.format(count=len(exercises))

    return f"""
    Eres un experto diseñador de diagramas de entrenamiento de fútbol que se especializa en crear representaciones visuales claras y profesionales en formato SVG.

    Tarea:
    Analiza la siguiente lista de ejercicios de fútbol. Para CADA ejercicio en la lista, genera un diagrama en formato SVG.

    Ejercicios para diagramar:
    ---
    {listing}
    ---
{SVG_SPECIFICATION}
{output_format}
    """


def diagram_schema(named=False):
    return NAMED_DIAGRAM_SCHEMA if named else POSITIONAL_DIAGRAM_SCHEMA
