"""SimAid API: badges, user badges and user level progress over REST and GraphQL."""

__version__ = "0.1.0"
