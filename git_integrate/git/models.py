"""Git repository data models.

Example:
    >>> from git_integrate.git.models import RepositoryIdentity
    >>> identity = RepositoryIdentity(owner="myorg", name="myrepo")
    >>> identity.full_name
    'myorg/myrepo'
"""

from pydantic import BaseModel, ConfigDict, field_validator


class RepositoryIdentity(BaseModel):
    """Owner and name of the GitHub repository behind a remote.

    Instances are immutable; they are derived once per run from the remote
    URL (see git_integrate.git.parser.parse_remote_url).

    Attributes:
        owner: Repository owner (user or organization)
        name: Repository name, without a .git suffix
    """

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    @field_validator("owner", "name")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Ensure owner and name are not empty.

        Raises:
            ValueError: If value is empty or whitespace
        """
        if not v or not v.strip():
            raise ValueError("Owner and name must not be empty")
        return v.strip()

    @field_validator("name")
    @classmethod
    def validate_no_git_suffix(cls, v: str) -> str:
        name = v.removesuffix(".git")
        if not name:
            raise ValueError("Name must not be empty")
        return name

    @property
    def full_name(self) -> str:
        """Return owner/name format."""
        return f"{self.owner}/{self.name}"

    def __str__(self) -> str:
        return self.full_name
