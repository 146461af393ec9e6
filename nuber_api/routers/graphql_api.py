"""
GraphQL endpoint serving the whole API.
"""
from strawberry.fastapi import GraphQLRouter

from nuber_api.core.config import get_settings
from nuber_api.gql.context import get_context
from nuber_api.gql.schema import schema

settings = get_settings()

router = GraphQLRouter(
    schema,
    context_getter=get_context,
    graphql_ide="graphiql" if settings.GRAPHIQL else None,
)
