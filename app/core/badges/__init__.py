"""Badge catalogue: ORM model, DTOs, service and the GraphQL-facing resolver."""
