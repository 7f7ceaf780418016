"""Clients for the external systems a run talks to."""

from dataclasses import dataclass, field

from konducta.clients.git import GitClient, GitProjects, Project


@dataclass
class Clients:
    """Client handles shared through the run context."""

    git: GitClient = field(default_factory=GitClient)


__all__ = ["Clients", "GitClient", "GitProjects", "Project"]
