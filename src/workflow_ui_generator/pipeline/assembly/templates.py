"""Static file templates for generated React projects."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime
from html import escape

from workflow_ui_generator.pipeline.workflow import WorkflowSpec

NPM_SCRIPTS: dict[str, str] = {
    "start": "react-scripts start",
    "build": "react-scripts build",
    "test": "react-scripts test",
    "eject": "react-scripts eject",
}


def package_json(project_id: str, workflow_name: str, dependencies: Mapping[str, str]) -> str:
    manifest = {
        "name": project_id,
        "version": "1.0.0",
        "description": f"Generated React app for n8n workflow: {workflow_name}",
        "private": True,
        "dependencies": dict(dependencies),
        "scripts": NPM_SCRIPTS,
        "eslintConfig": {"extends": ["react-app", "react-app/jest"]},
        "browserslist": {
            "production": [">0.2%", "not dead", "not op_mini all"],
            "development": [
                "last 1 chrome version",
                "last 1 firefox version",
                "last 1 safari version",
            ],
        },
    }
    return json.dumps(manifest, indent=2)


def index_html(workflow_name: str) -> str:
    title = escape(workflow_name)
    return f"""<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <meta name="theme-color" content="#000000" />
    <meta name="description" content="{title} - Generated from n8n workflow" />
    <title>{title}</title>
    <script src="https://cdn.tailwindcss.com"></script>
  </head>
  <body>
    <noscript>You need to enable JavaScript to run this app.</noscript>
    <div id="root"></div>
  </body>
</html>"""


INDEX_JS = """import React from 'react';
import ReactDOM from 'react-dom/client';
import App from './App';
import './index.css';

const root = ReactDOM.createRoot(document.getElementById('root'));
root.render(
  <React.StrictMode>
    <App />
  </React.StrictMode>
);"""


INDEX_CSS = """@tailwind base;
@tailwind components;
@tailwind utilities;

body {
  margin: 0;
  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', 'Roboto', 'Oxygen',
    'Ubuntu', 'Cantarell', 'Fira Sans', 'Droid Sans', 'Helvetica Neue',
    sans-serif;
  -webkit-font-smoothing: antialiased;
  -moz-osx-font-smoothing: grayscale;
}

code {
  font-family: source-code-pro, Menlo, Monaco, Consolas, 'Courier New',
    monospace;
}"""


GITIGNORE = """# dependencies
/node_modules
/.pnp
.pnp.js

# testing
/coverage

# production
/build

# misc
.DS_Store
.env.local
.env.development.local
.env.test.local
.env.production.local

npm-debug.log*
yarn-debug.log*
yarn-error.log*"""


PLACEHOLDER_APP = """import React from 'react';

function App() {
  return (
    <div className="max-w-4xl mx-auto p-6 bg-white min-h-screen">
      <p className="text-gray-600">No application was generated for this workflow.</p>
    </div>
  );
}

export default App;"""


def readme(spec: WorkflowSpec, generated_at: datetime) -> str:
    if spec.nodes:
        node_lines = "\n".join(
            f"- **{node.name or node.id or node.type_suffix}** ({node.type})" for node in spec.nodes
        )
    else:
        node_lines = "No nodes found"

    return f"""# {spec.name}

Generated React application from n8n workflow.

## About

This app was automatically generated from an n8n workflow with {len(spec.nodes)} nodes.

### Workflow Nodes:
{node_lines}

## Getting Started

1. Install dependencies:
   ```bash
   npm install
   ```

2. Start the development server:
   ```bash
   npm start
   ```

3. Open [http://localhost:3000](http://localhost:3000) to view it in the browser.

## Available Scripts

- `npm start` - Runs the app in development mode
- `npm run build` - Builds the app for production
- `npm test` - Launches the test runner

## Deployment

Run `npm run build` to create a production build in the `build` folder.

---

*Generated on {generated_at.isoformat()}*"""
