from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ctxman.errors import ContextNotFoundError, ResolutionError


@dataclass
class ContextRef:
    """Named binding of a server key and a user key"""
    name: str
    server: str
    user: str

    def to_dict(self) -> dict:
        """Convert context reference to dictionary for JSON serialization"""
        return {
            'name': self.name,
            'server': self.server,
            'user': self.user
        }

    @classmethod
    def from_dict(cls, data: dict):
        """Create context reference from dictionary"""
        return cls(name=data['name'], server=data.get('server', ''), user=data.get('user', ''))


@dataclass
class Server:
    """Server endpoint and its connection attributes"""
    server: str
    insecure: bool = False
    grpc_web: bool = False
    grpc_web_root_path: str = ""
    core: bool = False
    plain_text: bool = False

    def to_dict(self) -> dict:
        """Convert server to dictionary, omitting unset attributes"""
        data = {'server': self.server}
        if self.insecure:
            data['insecure'] = True
        if self.grpc_web:
            data['grpc-web'] = True
        if self.grpc_web_root_path:
            data['grpc-web-root-path'] = self.grpc_web_root_path
        if self.core:
            data['core'] = True
        if self.plain_text:
            data['plain-text'] = True
        return data

    @classmethod
    def from_dict(cls, data: dict):
        """Create server from dictionary (missing attributes default to off)"""
        return cls(
            server=data['server'],
            insecure=data.get('insecure', False),
            grpc_web=data.get('grpc-web', False),
            grpc_web_root_path=data.get('grpc-web-root-path', ""),
            core=data.get('core', False),
            plain_text=data.get('plain-text', False),
        )


@dataclass
class User:
    """Credentials stored for a server"""
    name: str
    auth_token: str = ""
    refresh_token: str = ""

    def to_dict(self) -> dict:
        data = {'name': self.name}
        if self.auth_token:
            data['auth-token'] = self.auth_token
        if self.refresh_token:
            data['refresh-token'] = self.refresh_token
        return data

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            name=data['name'],
            auth_token=data.get('auth-token', ""),
            refresh_token=data.get('refresh-token', ""),
        )


@dataclass
class Context:
    """A context reference joined with its server and user records"""
    name: str
    server: Server
    user: User


@dataclass
class ContextRow:
    """One line of the context listing"""
    is_current: bool
    name: str
    server: str


@dataclass
class LocalConfig:
    """Root of the local configuration file"""
    current_context: str = ""
    contexts: List[ContextRef] = field(default_factory=list)
    servers: List[Server] = field(default_factory=list)
    users: List[User] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert config to dictionary for JSON serialization"""
        return {
            'contexts': [c.to_dict() for c in self.contexts],
            'current-context': self.current_context,
            'servers': [s.to_dict() for s in self.servers],
            'users': [u.to_dict() for u in self.users]
        }

    @classmethod
    def from_dict(cls, data: dict):
        """Create config from dictionary (missing lists are treated as empty)"""
        return cls(
            current_context=data.get('current-context') or "",
            contexts=[ContextRef.from_dict(c) for c in data.get('contexts') or []],
            servers=[Server.from_dict(s) for s in data.get('servers') or []],
            users=[User.from_dict(u) for u in data.get('users') or []],
        )

    def get_context_ref(self, name: str) -> Optional[ContextRef]:
        for ref in self.contexts:
            if ref.name == name:
                return ref
        return None

    def get_server(self, key: str) -> Optional[Server]:
        for server in self.servers:
            if server.server == key:
                return server
        return None

    def get_user(self, key: str) -> Optional[User]:
        for user in self.users:
            if user.name == key:
                return user
        return None

    def resolve_context(self, name: str = "") -> Context:
        """Join a context reference with its server and user.

        An empty name resolves the current context.
        """
        if name == "":
            name = self.current_context
        ref = self.get_context_ref(name)
        if ref is None:
            raise ContextNotFoundError(name)
        server = self.get_server(ref.server)
        if server is None:
            raise ResolutionError(f"Server {ref.server} does not exist")
        user = self.get_user(ref.user)
        if user is None:
            raise ResolutionError(f"User {ref.user} does not exist")
        return Context(name=ref.name, server=server, user=user)

    def remove_context(self, name: str) -> Tuple[str, bool]:
        """Remove a context reference, returning the server key it pointed to"""
        for i, ref in enumerate(self.contexts):
            if ref.name == name:
                del self.contexts[i]
                return ref.server, True
        return "", False

    def remove_server(self, key: str) -> bool:
        for i, server in enumerate(self.servers):
            if server.server == key:
                del self.servers[i]
                return True
        return False

    def remove_user(self, key: str) -> bool:
        for i, user in enumerate(self.users):
            if user.name == key:
                del self.users[i]
                return True
        return False

    def is_empty(self) -> bool:
        """Check if nothing is left to store"""
        return not self.contexts and not self.servers and not self.users
