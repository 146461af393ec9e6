"""
Run blocking resolvers off the event loop.

Resolvers talk to SQLAlchemy and bcrypt synchronously. ``GraphQLRouter``
executes the schema on the event loop, so each such resolver is wrapped to
run on Starlette's threadpool, the same pool FastAPI uses for plain ``def``
endpoints and dependencies. Sibling fields may be resolved concurrently;
the request's lock keeps them from sharing its session at the same time.
"""
import functools

from starlette.concurrency import run_in_threadpool


def offloaded(resolver):
    """Turn a sync resolver taking ``info`` into an async one run on the threadpool."""

    @functools.wraps(resolver)
    async def wrapper(*args, **kwargs):
        async with kwargs["info"].context.lock:
            return await run_in_threadpool(resolver, *args, **kwargs)

    return wrapper
