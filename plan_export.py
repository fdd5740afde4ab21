import html
import re

import pandas as pd
import plotly.graph_objects as go

from plan_parser import PHASE_LABELS, Exercise, Heading, Paragraph, Phase

CAPTURE_SCALE = 2
HTML2CANVAS_URL = "https://cdnjs.cloudflare.com/ajax/libs/html2canvas/1.4.1/html2canvas.min.js"
JSPDF_URL = "https://cdnjs.cloudflare.com/ajax/libs/jspdf/2.5.1/jspdf.umd.min.js"
SVG_START_RE = re.compile(r"^\s*(?:<\?xml[^>]*>\s*)?<svg\b", re.IGNORECASE)

PHASE_COLORS = {
    Phase.WARMUP: "#1AB27A",
    Phase.MAIN: "#2BA7D1",
    Phase.COOLDOWN: "#EB734D",
    Phase.OTHER: "#86929A",
}

PLAN_STYLES = """
<style>
    body { margin: 0; font-family: 'Helvetica', sans-serif; background: transparent; }
    #plan-capture { background: #111827; color: #D1D5DB; border-radius: 16px; padding: 24px; }
    #plan-capture h1 { color: #4ADE80; text-align: center; font-size: 26px; margin: 0 0 8px 0; }
    #plan-capture h2 { color: #4ADE80; font-size: 20px; margin: 24px 0 12px 0; }
    #plan-capture p { margin: 6px 0 6px 16px; line-height: 1.5; }
    #plan-capture p.summary { text-align: center; color: #9CA3AF; font-weight: 700; margin: 0 0 24px 0; }
    .exercise { margin-top: 16px; padding: 16px; background: rgba(17, 24, 39, 0.5); border: 1px solid #374151; border-radius: 12px; }
    .exercise h3 { color: #F3F4F6; font-size: 17px; margin: 0; }
    .exercise .description { white-space: pre-line; margin: 4px 0 0 0; }
    .diagram { margin-top: 16px; padding: 8px; background: rgba(22, 101, 52, 0.2); border: 1px solid #374151; border-radius: 8px; }
    .diagram svg { width: 100%; height: auto; display: block; }
    .export-actions { display: grid; grid-template-columns: 1fr 1fr; gap: 12px; margin-top: 16px; }
    .export-actions button { padding: 14px; font-size: 15px; font-weight: 600; color: white; border: none; border-radius: 16px; cursor: pointer; background: linear-gradient(135deg, #28A745 0%, #20893A 100%); }
    .export-actions button:disabled { background: #6B7280; cursor: not-allowed; }
</style>
"""


def safe_file_stem(title):
    stem = re.sub(r"[\s/\\]+", "_", (title or "").strip())
    stem = re.sub(r"[^\w\-]", "", stem)
    return stem or "plan_entrenamiento"


def svg_markup(diagram):
    # embedded unescaped, so only an svg element is accepted
    if diagram and SVG_START_RE.match(diagram):
        return diagram
    return None


def render_plan_html(parsed):
    """HTML fragment for the parsed plan; diagrams are embedded as raw SVG markup."""
    parts = [f"<h1>{html.escape(parsed.title)}</h1>"] if parsed.title else []

    for block in parsed.content:
        if isinstance(block, Heading):
            parts.append(f"<h2>{html.escape(block.text)}</h2>")
        elif isinstance(block, Paragraph):
            css = ' class="summary"' if block.emphasis else ""
            parts.append(f"<p{css}>{html.escape(block.text)}</p>")
        elif isinstance(block, Exercise):
            svg = svg_markup(block.diagram)
            diagram = f'<div class="diagram">{svg}</div>' if svg else ""
            parts.append(
                f'<div class="exercise">'
                f"<h3>{html.escape(block.title)}</h3>"
                f'<p class="description">{html.escape(block.description)}</p>'
                f"{diagram}"
                f"</div>"
            )
    return "\n".join(parts)


def estimate_height(parsed):
    """Rough iframe height for components.html, in pixels."""
    height = 160
    for block in parsed.content:
        if isinstance(block, Heading):
            height += 56
        elif isinstance(block, Paragraph):
            height += 32
        elif isinstance(block, Exercise):
            height += 72 + 22 * (block.description.count("\n") + len(block.description) // 70)
            if svg_markup(block.diagram):
                height += 300
    return height + 90


def build_export_page(parsed):
    """
    Self-contained document with the plan view and PNG/PDF buttons.

    The capture runs in the same document as the plan so html2canvas can see
    it. Both buttons are disabled while a capture is in flight; failures are
    only logged to the console.
    """
    file_stem = safe_file_stem(parsed.title)
    return f"""
        {PLAN_STYLES}
        <div id="plan-capture">
        {render_plan_html(parsed)}
        </div>
        <div class="export-actions">
            <button id="save-png-btn" onclick="exportPlan('png')">📸 Guardar como imagen</button>
            <button id="save-pdf-btn" onclick="exportPlan('pdf')">📄 Guardar como PDF</button>
        </div>
        <script src="{HTML2CANVAS_URL}"></script>
        <script src="{JSPDF_URL}"></script>
        <script>
        let exporting = false;
        function setExportButtons(disabled) {{
            document.getElementById("save-png-btn").disabled = disabled;
            document.getElementById("save-pdf-btn").disabled = disabled;
        }}
        async function exportPlan(format) {{
            if (exporting) return;
            exporting = true; setExportButtons(true);
            const el = document.getElementById("plan-capture");
            try {{
                const canvas = await html2canvas(el, {{ scale: {CAPTURE_SCALE}, backgroundColor: '#111827', useCORS: true }});
                const image = canvas.toDataURL("image/png");
                if (format === "png") {{
                    const link = document.createElement("a");
                    link.href = image; link.download = "{file_stem}.png";
                    document.body.appendChild(link); link.click(); document.body.removeChild(link);
                }} else {{
                    const {{ jsPDF }} = window.jspdf;
                    const pdf = new jsPDF({{
                        orientation: canvas.width > canvas.height ? "landscape" : "portrait",
                        unit: "px",
                        format: [canvas.width, canvas.height],
                    }});
                    pdf.addImage(image, "PNG", 0, 0, canvas.width, canvas.height);
                    pdf.save("{file_stem}.pdf");
                }}
            }} catch (err) {{
                console.error("Plan export failed:", err);
            }} finally {{
                exporting = false; setExportButtons(false);
            }}
        }}
        </script>
    """


def exercises_dataframe(parsed):
    rows = [
        {
            "Fase": PHASE_LABELS[ex.phase],
            "Ejercicio": ex.title,
            "Descripción": ex.description,
            "Diagrama": "Sí" if ex.diagram else "No",
        }
        for ex in parsed.exercises
    ]
    return pd.DataFrame(rows, columns=["Fase", "Ejercicio", "Descripción", "Diagrama"])


def exercises_csv(parsed):
    return exercises_dataframe(parsed).to_csv(index=False).encode("utf-8-sig")


def phase_minutes(parsed):
    return [
        (heading.text, heading.minutes, heading.phase)
        for heading in parsed.headings
        if heading.minutes is not None
    ]


def create_phase_chart(parsed):
    """Bar chart of minutes per phase, or None when no heading carries a duration."""
    phases = phase_minutes(parsed)
    if not phases:
        return None

    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=[PHASE_LABELS[phase] if phase is not Phase.OTHER else text for text, _, phase in phases],
            y=[minutes for _, minutes, _ in phases],
            name="",
            marker=dict(color=[PHASE_COLORS[phase] for _, _, phase in phases], cornerradius=16),
            hovertemplate='<span style="font-size:14px;"><b>%{x}</b>: %{y} min</span><extra></extra>',
        )
    )
    fig.update_layout(
        height=300,
        title=dict(text="", font=dict(size=1)),
        xaxis_title="",
        yaxis_title=dict(text="minutos", font=dict(size=14, color="#0D1628")),
        plot_bgcolor="white",
        paper_bgcolor="white",
        font=dict(family="Helvetica, sans-serif", size=12, color="#86929A"),
        showlegend=False,
        margin=dict(l=50, r=20, t=30, b=30),
        xaxis=dict(showgrid=False, showline=True, linecolor="#E8E8E8"),
        yaxis=dict(showgrid=True, gridcolor="#E8E8E8", fixedrange=True),
        hoverlabel=dict(
            bgcolor="#0D1628",
            font_size=14,
            font_color="white",
            bordercolor="rgba(0,0,0,0)",
            font_family="Helvetica, sans-serif",
        ),
        bargap=0.4,
    )
    return fig
