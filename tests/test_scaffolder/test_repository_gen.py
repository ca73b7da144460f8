"""Tests for repository generation (architex.scaffolder.repository_gen)."""

from __future__ import annotations

import pytest

from architex.exceptions import InvalidOptionError, PatternDisabledError
from architex.scaffolder.repository_gen import RepositoryGenerator

pytestmark = pytest.mark.unit

INTERFACE = "app/repositories/interfaces/user_repository_interface.py"
IMPLEMENTATION = "app/repositories/user_repository.py"
BASE = "app/repositories/base/base_repository.py"


class TestRepositoryGenerator:
    def test_two_files_by_default(self, architecture, output_root):
        paths = architecture.generate_repository("User")
        assert paths == [INTERFACE, IMPLEMENTATION]
        for path in paths:
            assert "User" in (output_root / path).read_text()

    def test_interface_content(self, architecture, output_root):
        architecture.generate_repository("User")
        content = (output_root / INTERFACE).read_text()
        assert "class UserRepositoryInterface(ABC):" in content
        assert "from app.models.user import User" in content

    def test_implementation_content(self, architecture, output_root):
        architecture.generate_repository("User")
        content = (output_root / IMPLEMENTATION).read_text()
        assert "class UserRepository(BaseRepository[User], UserRepositoryInterface):" in content
        assert (
            "from app.repositories.interfaces.user_repository_interface "
            "import UserRepositoryInterface"
        ) in content
        assert 'table = "users"' in content

    def test_name_is_formatted(self, architecture):
        paths = architecture.generate_repository("blog_post")
        assert paths[-1] == "app/repositories/blog_post_repository.py"

    def test_model_option(self, architecture, output_root):
        architecture.generate_repository("Customer", {"model": "person"})
        content = (output_root / "app/repositories/customer_repository.py").read_text()
        assert "from app.models.person import Person" in content
        assert 'table = "people"' in content

    def test_with_base_emitted_first(self, architecture, output_root):
        paths = architecture.generate_repository("User", {"with_base": True})
        assert paths == [BASE, INTERFACE, IMPLEMENTATION]
        assert "class BaseRepository(Generic[T]):" in (output_root / BASE).read_text()

    def test_base_skipped_when_present(self, architecture, output_root):
        architecture.generate_repository("User", {"with_base": True})
        paths = architecture.generate_repository("Order", {"with_base": True})
        assert BASE not in paths
        assert len(paths) == 2

    def test_generate_base_from_config(self, config, output_root, fixed_clock):
        from architex.scaffolder import ArchitectureGenerator

        config.patterns.repository.generate_base = True
        generator = ArchitectureGenerator(config, root=output_root, clock=fixed_clock)
        assert generator.generate_repository("User")[0] == BASE

    def test_with_service_appends_service(self, architecture, output_root):
        paths = architecture.generate_repository("User", {"with_service": True})
        assert paths == [INTERFACE, IMPLEMENTATION, "app/services/user_service.py"]
        assert "class UserService:" in (output_root / paths[-1]).read_text()

    def test_with_service_respects_disabled_service(self, architecture):
        architecture.config.patterns.service.enabled = False
        with pytest.raises(PatternDisabledError):
            architecture.generate_repository("User", {"with_service": True})

    def test_with_service_requires_service_generator(self, architecture):
        standalone = RepositoryGenerator(
            architecture.config.patterns.repository,
            architecture.resolver,
            architecture.renderer,
            root=architecture.root,
        )
        with pytest.raises(InvalidOptionError):
            standalone.plan("User", {"with_service": True})

    def test_custom_suffixes_and_location(self, architecture):
        cfg = architecture.config.patterns.repository
        cfg.path = "src/data"
        cfg.interface_suffix = "Port"
        cfg.implementation_suffix = "Store"
        paths = [f.path for f in architecture.repository.plan("User")]
        assert paths == ["src/data/interfaces/user_port.py", "src/data/user_store.py"]
