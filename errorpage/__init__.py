"""
errorpage — Sentry-backed error pages for FastAPI applications.

Application package root. Uses the same hexagonal layout
(ports & adapters) as the services it is embedded in.

Bounded contexts:
    - dispatch: Classification of dispatch/render errors, reporting
      to the error tracker, shaping of the error page and status.

Layers:
    - domain: Pure policy, entities, ports (ABCs), errors, event manager.
    - infrastructure: Adapters (Sentry, event bus) implementing domain ports.
    - interfaces: FastAPI routers, view templates, dependency wiring.
    - shared: Cross-cutting concerns (error handlers, security, logging).
"""
