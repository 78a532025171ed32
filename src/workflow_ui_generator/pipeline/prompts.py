"""Prompt contracts for the text-generation service.

Each builder embeds the serialized workflow and the shared design-system
contract. The webhook URL comes from configuration; when none is available the
prompt asks for a named constant the user fills in later.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from workflow_ui_generator.pipeline.workflow import WorkflowNode, WorkflowSpec, serialize_workflow

WEBHOOK_PLACEHOLDER = "WEBHOOK_URL"

DESIGN_SYSTEM = """CONSISTENT DESIGN SYSTEM - FOLLOW THESE EXACT STYLES:
- Container: max-w-4xl mx-auto p-6 bg-white min-h-screen
- Page header: text-3xl font-bold text-gray-800 mb-6
- Section headers: text-xl font-semibold text-gray-700 mb-4
- Cards: bg-white border border-gray-200 rounded-lg shadow-sm p-6 mb-6
- Form inputs: w-full p-3 border border-gray-300 rounded-lg focus:ring-2 focus:ring-blue-500 focus:border-blue-500
- Input labels: block text-sm font-medium text-gray-700 mb-2
- Primary buttons: bg-blue-600 hover:bg-blue-700 disabled:bg-gray-400 text-white font-medium py-3 px-6 rounded-lg transition-colors
- Secondary buttons: bg-gray-200 hover:bg-gray-300 text-gray-700 font-medium py-3 px-6 rounded-lg transition-colors
- Success messages: bg-green-50 border border-green-200 text-green-800 p-4 rounded-lg mb-4
- Error messages: bg-red-50 border border-red-200 text-red-800 p-4 rounded-lg mb-4
- Loading states: bg-blue-50 border border-blue-200 text-blue-800 p-4 rounded-lg mb-4
- Step indicators: flex items-center justify-center w-10 h-10 rounded-full bg-blue-600 text-white font-semibold text-lg
- Progress indicators: bg-gray-200 rounded-full h-3 with bg-blue-600 fill
- Form sections: space-y-4 mb-6
- Grid layouts: grid grid-cols-1 md:grid-cols-2 gap-6
- Consistent spacing: mb-6 for major sections, mb-4 for elements, mb-2 for labels
- Text styles: text-gray-600 for descriptions, text-gray-800 for content"""


def _webhook_instruction(webhook_url: str | None) -> str:
    if webhook_url:
        return f"POST form submissions as JSON to: {webhook_url}"
    return (
        f"Declare `const {WEBHOOK_PLACEHOLDER} = '';` at the top of the component and POST "
        f"form submissions as JSON to {WEBHOOK_PLACEHOLDER}; show a notice when it is empty"
    )


def _submit_pattern(webhook_url: str | None) -> str:
    target = f"'{webhook_url}'" if webhook_url else WEBHOOK_PLACEHOLDER
    return f"""const handleSubmit = async (formData) => {{
  setLoading(true);
  try {{
    const response = await fetch({target}, {{
      method: 'POST',
      headers: {{ 'Content-Type': 'application/json' }},
      body: JSON.stringify(formData)
    }});
    const result = await response.json();
    setResponse(result);
  }} catch (error) {{
    setError(error.message);
  }} finally {{
    setLoading(false);
  }}
}};"""


def build_preview_prompt(spec: WorkflowSpec, webhook_url: str | None = None) -> str:
    return f"""Generate ONLY a React functional component for this n8n workflow:
{serialize_workflow(spec)}

REQUIREMENTS FOR LIVE PREVIEW:
1. NO import statements (React is provided automatically)
2. NO export statements
3. Component must be named 'WorkflowApp'
4. Use React hooks: useState, useEffect, useMemo (available in scope)
5. Use the 'workflow' variable for workflow data (provided in scope)
6. Style with Tailwind CSS classes only
7. Create a multi-step application for the workflow
8. {_webhook_instruction(webhook_url)}
9. Show loading, success and error states around every request
10. Display the real response returned by the workflow

{DESIGN_SYSTEM}

For form submissions, use this pattern:
{_submit_pattern(webhook_url)}

Generate this structure:
function WorkflowApp() {{
  const [currentStep, setCurrentStep] = useState(0);
  const [formData, setFormData] = useState({{}});
  const [loading, setLoading] = useState(false);
  const [response, setResponse] = useState(null);
  const [error, setError] = useState(null);

  return (
    <div className="max-w-4xl mx-auto p-6">
      {{/* your UI here */}}
    </div>
  );
}}"""


def build_app_prompt(spec: WorkflowSpec, webhook_url: str | None = None) -> str:
    return f"""Generate ONLY a complete React App.jsx file for this n8n workflow:
{serialize_workflow(spec)}

REQUIREMENTS:
1. Return ONLY JSX/JavaScript code - NO explanations, NO markdown code blocks
2. Start with imports, end with export default App
3. Component name must be: App
4. Include ALL necessary imports (React, hooks, axios if needed)
5. {_webhook_instruction(webhook_url)}
6. Show loading states and the actual responses
7. Use Tailwind CSS classes for styling
8. Handle API errors
9. The file must be valid JavaScript that runs as-is

{DESIGN_SYSTEM}

For form submissions, use this pattern:
{_submit_pattern(webhook_url)}

Generate the complete App.jsx file content now:"""


def build_node_component_prompt(
    node_type: str, component_name: str, nodes: Sequence[WorkflowNode]
) -> str:
    nodes_json = json.dumps(
        [node.model_dump(mode="json", by_alias=True, exclude_none=True) for node in nodes]
    )
    return f"""Generate ONLY a React component file for n8n node type: {node_type}

REQUIREMENTS:
1. Return ONLY JSX/JavaScript code - NO explanations, NO markdown blocks
2. Component name: {component_name}
3. Include ALL necessary imports
4. Use Tailwind CSS for styling
5. Export as default
6. Valid JavaScript only

Nodes to handle: {nodes_json}

Generate complete {component_name}.jsx file:"""


def build_modification_prompt(
    spec: WorkflowSpec, current_component: str, instruction: str
) -> str:
    return f"""Modify this React component for the n8n workflow below.

Workflow:
{serialize_workflow(spec)}

Current component:
{current_component}

Requested change:
{instruction.strip()}

REQUIREMENTS:
1. Return the COMPLETE updated component, not a diff
2. Keep the component name unchanged
3. Return ONLY code - NO explanations, NO markdown blocks
4. Keep following the design system below

{DESIGN_SYSTEM}"""
