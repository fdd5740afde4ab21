import logging

import streamlit as st
import streamlit.components.v1 as components
from PIL import Image

import wizard
from coach_service import CoachClient
from config import ConfigurationError, load_settings
from diagrams import DiagramSet
from plan_export import (
    build_export_page,
    create_phase_chart,
    estimate_height,
    exercises_csv,
    safe_file_stem,
)
from plan_parser import parse_plan
from preferences import (
    MAX_DURATION,
    MIN_DURATION,
    Difficulty,
    GroupSize,
    SquadSize,
    TrainingType,
)
from wizard import AppStep

# --- 1. Configuración de la página ---
try:
    # 'icon.png' is optional and must sit next to this script
    icon = Image.open("icon.png")
except FileNotFoundError:
    icon = "⚽"

st.set_page_config(page_title="Entrenador de Fútbol AI", page_icon=icon, layout="centered")

st.markdown(
    """
<style>
    .stApp {
        background: #111827;
        font-family: 'Helvetica', sans-serif;
        color: white;
    }

    .block-container {
        max-width: 820px;
        margin: 0 auto;
        padding: 2rem 1.5rem 5rem 1.5rem !important;
    }

    .stTextArea > div {
        background-color: #1F2937;
        border: 2px solid #374151;
        border-radius: 12px;
    }

    div.stButton > button, div.stDownloadButton > button {
        width: 100%;
        border-radius: 12px;
        font-weight: 700;
        padding: 12px 16px;
    }

    div.stButton > button[kind="primary"] {
        background: #16A34A;
        border: none;
    }

    .wizard-title {
        text-align: center;
        font-size: 40px;
        font-weight: 700;
        margin-bottom: 8px;
    }

    .wizard-subtitle {
        text-align: center;
        color: #9CA3AF;
        font-size: 17px;
        margin-bottom: 24px;
    }

    header, footer {
        visibility: hidden;
    }
</style>
""",
    unsafe_allow_html=True,
)

# --- 2. Configuración de Gemini (variables de entorno) ---
try:
    settings = load_settings()
except ConfigurationError as e:
    st.error(f"Configuración inválida: {e}")
    st.stop()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@st.cache_resource
def get_client(api_key, model_name, diagram_mode):
    return CoachClient(api_key, model_name=model_name, diagram_mode=diagram_mode)


client = None
if settings.api_key:
    client = get_client(settings.api_key, settings.model_name, settings.diagram_mode)

# --- 3. Estado de la sesión ---
state = st.session_state
wizard.init_state(state)

STEP_TITLES = {
    AppStep.TRAINING_TYPE: "¿Qué quieres entrenar?",
    AppStep.DIFFICULTY: "¿Cuál es tu nivel?",
    AppStep.DURATION: "¿Cuánto tiempo tienes?",
    AppStep.GROUP_SIZE: "¿Para quién es el entrenamiento?",
}


def header(subtitle):
    st.markdown(
        f"""
<div style="text-align: center; font-size: 64px;">⚽</div>
<div class="wizard-title">Entrenador de Fútbol AI</div>
<div class="wizard-subtitle">{subtitle}</div>
""",
        unsafe_allow_html=True,
    )


def generate_plan():
    with st.spinner("El coach está preparando tus ejercicios..."):
        wizard.request_plan(state, client)


# --- 4. Pantallas del asistente ---
def render_start():
    header(
        'Describe qué quieres entrenar hoy. Por ejemplo: "Quiero mejorar mi resistencia '
        'y los pases largos para jugar de mediocampista".'
    )
    state.user_input = st.text_area(
        "Objetivos",
        value=state.user_input,
        placeholder="Escribe aquí tus objetivos de entrenamiento...",
        label_visibility="collapsed",
    )
    options = [option.value for option in SquadSize]
    state.squad_size = st.radio(
        "¿Para quién es el entrenamiento?",
        options=options,
        index=options.index(state.squad_size),
        horizontal=True,
    )
    if st.button(
        "Crear Mi Plan de Entrenamiento",
        type="primary",
        disabled=state.is_generating,
        use_container_width=True,
    ):
        wizard.start_free(state)
        generate_plan()
        st.rerun()

    if st.button("Prefiero elegir paso a paso", use_container_width=True):
        wizard.start_guided(state)
        st.rerun()


def _choice(label, enum_cls, key):
    options = [option.value for option in enum_cls]
    current = state[key]
    state[key] = st.radio(
        label,
        options=options,
        index=options.index(current) if current in options else None,
        label_visibility="collapsed",
    )


def render_guided_step(step):
    header(STEP_TITLES[step])

    if step == AppStep.TRAINING_TYPE:
        _choice("Tipo de entrenamiento", TrainingType, "training_type")
    elif step == AppStep.DIFFICULTY:
        _choice("Dificultad", Difficulty, "difficulty")
    elif step == AppStep.DURATION:
        state.duration = st.slider(
            "Duración (minutos)",
            min_value=MIN_DURATION,
            max_value=MAX_DURATION,
            value=state.duration,
            step=5,
        )
    elif step == AppStep.GROUP_SIZE:
        _choice("Tamaño del grupo", GroupSize, "group_size")

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Atrás", use_container_width=True):
            wizard.go_back(state)
            st.rerun()
    with col2:
        if step == AppStep.GROUP_SIZE:
            if st.button(
                "Crear Mi Plan",
                type="primary",
                disabled=state.is_generating,
                use_container_width=True,
            ):
                generate_plan()
                st.rerun()
        elif st.button("Siguiente", type="primary", use_container_width=True):
            if wizard.advance(state):
                st.rerun()


def render_plan():
    diagrams = state.diagrams
    parsed = parse_plan(state.plan, diagrams)

    components.html(build_export_page(parsed), height=estimate_height(parsed), scrolling=True)

    chart = create_phase_chart(parsed)
    if chart is not None:
        st.subheader("⏱️ Distribución del tiempo")
        st.plotly_chart(chart, use_container_width=True, config={"displaylogo": False})

    if diagrams is None:
        if st.button(
            "Generar Diagramas Visuales",
            disabled=state.is_generating_diagrams,
            use_container_width=True,
        ):
            with st.spinner("Creando diagramas..."):
                wizard.request_diagrams(state, client)
            st.rerun()
    elif isinstance(diagrams, DiagramSet) and not diagrams:
        st.info("No hay diagramas disponibles para este plan.")

    st.download_button(
        label="📥 Descargar ejercicios (CSV)",
        data=exercises_csv(parsed),
        file_name=f"{safe_file_stem(parsed.title)}.csv",
        mime="text/csv",
        use_container_width=True,
    )

    if st.button("Crear Otro Plan", type="primary", use_container_width=True):
        wizard.reset(state)
        st.rerun()


# --- 5. UI principal ---
step = AppStep(state.step)
if step == AppStep.START:
    render_start()
elif step in wizard.GUIDED_STEPS:
    render_guided_step(step)
elif step == AppStep.GENERATING:
    st.markdown("<div class=\"wizard-subtitle\">Generando tu plan...</div>", unsafe_allow_html=True)
elif step == AppStep.PLAN and state.plan:
    render_plan()

if state.error:
    st.error(state.error)
