"""Static setup instructions per consuming framework."""

from __future__ import annotations

from typing import Literal

Framework = Literal["next-app", "next-pages", "vite", "general"]

PACKAGE_NAME = "@trycompai/design-system"

_BASE_STEPS: tuple[dict[str, str], ...] = (
    {
        "title": "Install the package",
        "command": f"pnpm add {PACKAGE_NAME}",
    },
    {
        "title": "Import global styles",
        "description": "Add this import to your root layout or entry file:",
        "code": f"import '{PACKAGE_NAME}/styles/globals.css';",
    },
)

_FRAMEWORK_STEPS: dict[str, tuple[str, tuple[dict[str, str], ...]]] = {
    "next-app": (
        "Next.js App Router",
        (
            {
                "title": "Setup root layout",
                "file": "app/layout.tsx",
                "code": f"""import '{PACKAGE_NAME}/styles/globals.css';
import {{ cn }} from '{PACKAGE_NAME}';

export default function RootLayout({{ children }}: {{ children: React.ReactNode }}) {{
  return (
    <html lang="en" suppressHydrationWarning>
      <body className={{cn('min-h-screen bg-background font-sans antialiased')}}>
        {{children}}
      </body>
    </html>
  );
}}""",
            },
        ),
    ),
    "next-pages": (
        "Next.js Pages Router",
        (
            {
                "title": "Setup _app.tsx",
                "file": "pages/_app.tsx",
                "code": f"""import '{PACKAGE_NAME}/styles/globals.css';
import type {{ AppProps }} from 'next/app';

export default function App({{ Component, pageProps }}: AppProps) {{
  return <Component {{...pageProps}} />;
}}""",
            },
        ),
    ),
    "vite": (
        "Vite + React",
        (
            {
                "title": "Setup main.tsx",
                "file": "src/main.tsx",
                "code": f"""import '{PACKAGE_NAME}/styles/globals.css';
import React from 'react';
import ReactDOM from 'react-dom/client';
import App from './App';

ReactDOM.createRoot(document.getElementById('root')!).render(
  <React.StrictMode>
    <App />
  </React.StrictMode>
);""",
            },
        ),
    ),
    "general": (
        "General",
        (
            {
                "title": "Import styles in your entry file",
                "description": "Make sure globals.css is imported before any component usage.",
            },
            {
                "title": "Use components",
                "code": f"""import {{ Button, Card, Stack, Text }} from '{PACKAGE_NAME}';

// IMPORTANT: Components do NOT accept className
// Use variants and props only
<Button variant="primary" size="lg">Click me</Button>
<Card maxWidth="md">Content</Card>
<Stack gap="4" align="center">...</Stack>""",
            },
        ),
    ),
}


def installation_instructions(framework: str) -> dict[str, object]:
    """Return setup steps; unknown frameworks fall back to ``general``."""
    label, extra_steps = _FRAMEWORK_STEPS.get(framework, _FRAMEWORK_STEPS["general"])
    steps = [dict(step) for step in (*_BASE_STEPS, *extra_steps)]
    return {"framework": label, "steps": steps}
