BACKEND_SYSTEM_PROMPT = """
You are a senior backend engineer generating one source file of a web application scaffold.
Write TypeScript with async/await, input validation, correct HTTP status codes and explicit error handling.
Return only the file contents. No explanations.
""".strip()

ROUTES_PROMPT = """
Generate the {framework} API routes file for a web application backed by {database}.

Features to include: {features}

Cover every endpoint the features need, and protect routes with the authentication middleware where required.
""".strip()

MODELS_PROMPT = """
Generate the {database} models/schema file for a web application.

Features: {features}

Use precise field types, relationships between models, created/updated timestamps and validation rules where appropriate.
""".strip()

MIDDLEWARE_PROMPT = """
Generate the middleware file for a {framework} application.

Features: {features}

Include authentication middleware, error-handling middleware, request logging and CORS configuration where needed.
""".strip()
