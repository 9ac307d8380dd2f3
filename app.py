import logging

import gradio as gr
from functools import partial

from field_header_filter import settings
from field_header_filter.handlers import (
    apply_filter_handler,
    apply_preset_handler,
    check_node_handler,
    load_json_file_handler,
    preset_fields,
)
from field_header_filter.presets import load_presets

settings.init_runtime()
logger = logging.getLogger("field_header_filter.app")

try:
    PRESETS = load_presets()
except (OSError, ValueError) as e:
    logger.warning("Failed to load presets: %s", e)
    PRESETS = []

initial_json, initial_include, initial_exclude, initial_explicit = (
    preset_fields(PRESETS[0]) if PRESETS else ("", "", "", "")
)

# --- UI Definition ---
with gr.Blocks(title="API Field Header Filter") as demo:
    gr.Markdown("# API Field Header Filter")
    gr.Markdown("Test field inclusion & exclusion filters for API responses.")
    gr.Markdown(
        "**Rules:** Inclusion uses comma-separated dot notation (e.g. `A.B, A.C`) or set notation "
        "(e.g. `A(B, C(*))`); `*` is only allowed inside parentheses. Exclusion overrides inclusion. "
        "Explicit fields must be named in the inclusion list; including a parent does not include them."
    )

    with gr.Row():
        # Left Panel: Input
        with gr.Column(scale=1):
            gr.Markdown("### 1. JSON Input")
            preset_selector = gr.Dropdown(
                label="Preset",
                choices=[p["name"] for p in PRESETS],
                value=PRESETS[0]["name"] if PRESETS else None,
                interactive=True,
            )
            file_input = gr.File(label="Upload JSON File", file_types=[".json"])
            json_input = gr.Code(label="JSON Input", language="json", value=initial_json, lines=18)
            json_error = gr.Textbox(label="Status", interactive=False)

        # Right Panel: Filter
        with gr.Column(scale=1):
            gr.Markdown("### 2. Filter Headers")
            include_input = gr.Textbox(
                label="Field Inclusion (Attributes header)",
                placeholder="e.g. A.B, A.C or A(*)",
                value=initial_include,
            )
            exclude_input = gr.Textbox(
                label="Field Exclusion (Attributes-Excluded header)",
                placeholder="e.g. A.B.X.P",
                value=initial_exclude,
            )
            explicit_input = gr.Textbox(
                label="Explicit Fields (dot notation, one per line or comma-separated)",
                lines=3,
                value=initial_explicit,
            )
            apply_btn = gr.Button("Apply Filter", variant="primary")
            field_warning = gr.Markdown(visible=False)

            gr.Markdown("### 3. Filtered Output")
            json_output = gr.Code(label="Filtered Output", language="json", interactive=False, lines=18)

            gr.Markdown("### 4. Check Node")
            with gr.Row():
                node_input = gr.Textbox(
                    label="Check if this node exists in the filtered response",
                    placeholder="e.g. routes.legs.points",
                )
                node_check_btn = gr.Button("Check")
            node_result = gr.Textbox(label="Result", interactive=False)

    filter_inputs = [json_input, include_input, exclude_input, explicit_input]
    filter_outputs = [json_output, json_error, field_warning]

    apply_btn.click(fn=apply_filter_handler, inputs=filter_inputs, outputs=filter_outputs)

    preset_selector.change(
        fn=partial(apply_preset_handler, presets=PRESETS),
        inputs=[preset_selector],
        outputs=filter_inputs,
    ).then(fn=apply_filter_handler, inputs=filter_inputs, outputs=filter_outputs)

    file_input.upload(
        fn=load_json_file_handler,
        inputs=[file_input],
        outputs=[json_input, json_error],
    )

    node_check_btn.click(
        fn=check_node_handler,
        inputs=[node_input, json_output],
        outputs=[node_result],
    )

    # Show the first preset's result on load.
    demo.load(fn=apply_filter_handler, inputs=filter_inputs, outputs=filter_outputs)

if __name__ == "__main__":
    demo.launch(server_name=settings.server_name(), server_port=settings.server_port())
