"""
Streamable HTTP transport for the exercise MCP server.

- origin: Origin header validation
- negotiation: JSON vs SSE response selection
- endpoints: POST/GET/OPTIONS handling over a generic HTTP event
- http: FastAPI application (uvicorn)
- serverless: API Gateway style lambda_handler
"""
