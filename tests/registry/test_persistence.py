"""Tests for loading and saving the registry through storage."""

import pytest

from domainer.domains.types import Domain
from domainer.registry.registry import DOMAINS_KEY, OPTIONS_KEY, ConfigRegistry, SaveScope
from domainer.storage.memory import MemoryStorage


class TestLoad:
    """Loading options and domains."""

    def test_load_coerces_to_declared_type(self, seeded_storage):
        registry = ConfigRegistry(seeded_storage)
        registry.load()

        assert registry.get("cookie_lifetime") == 3600
        assert registry.get("redirection_permanent") is False
        assert registry.get("www_rule") == "always"
        assert registry.get("blocked_hosts") == ["localhost"]

    def test_missing_options_get_defaults(self, seeded_storage):
        registry = ConfigRegistry(seeded_storage)
        registry.load()

        assert registry.get("force_https") is False
        assert registry.get("remote_login") is True

    def test_unknown_stored_options_dropped(self):
        storage = MemoryStorage({OPTIONS_KEY: {"legacy_junk": 1, "www_rule": "never"}})
        registry = ConfigRegistry(storage)
        registry.load()

        assert "legacy_junk" not in registry.all_options()
        assert registry.get("www_rule") == "never"

    def test_deprecated_stored_option_migrated(self):
        storage = MemoryStorage({OPTIONS_KEY: {"permanent_redirects": "0"}})
        registry = ConfigRegistry(storage)
        registry.load()

        assert registry.get("redirection_permanent") is False

    def test_replacement_wins_over_deprecated_stored_option(self):
        storage = MemoryStorage({OPTIONS_KEY: {"www": "always", "www_rule": "never"}})
        registry = ConfigRegistry(storage)
        registry.load()

        assert registry.get("www_rule") == "never"

    def test_load_is_idempotent(self, seeded_storage):
        registry = ConfigRegistry(seeded_storage)
        registry.load()
        reads = seeded_storage.reads

        registry.load()

        assert seeded_storage.reads == reads
        assert registry.is_loaded

    def test_force_reload_reads_again(self, seeded_storage):
        registry = ConfigRegistry(seeded_storage)
        registry.load()
        reads = seeded_storage.reads

        registry.load(force_reload=True)

        assert seeded_storage.reads == reads + 2

    def test_force_reload_discards_unsaved_changes(self, seeded_storage):
        registry = ConfigRegistry(seeded_storage)
        registry.load()
        registry.set("www_rule", "never")
        registry.add_domain(Domain(name="unsaved.com"))

        registry.load(force_reload=True)

        assert registry.get("www_rule") == "always"
        assert registry.get_domain("unsaved.com") is None

    def test_force_reload_keeps_overrides(self, seeded_storage):
        registry = ConfigRegistry(seeded_storage)
        registry.load()
        registry.override("www_rule", "never")

        registry.load(force_reload=True)

        assert registry.get("www_rule") == "never"

    def test_load_domains(self):
        storage = MemoryStorage({DOMAINS_KEY: {"example.com": {"primary": True}}})
        registry = ConfigRegistry(storage)
        registry.load()

        domain = registry.get_domain("example.com")
        assert isinstance(domain, Domain)
        assert domain.name == "example.com"
        assert domain.primary is True
        assert not registry.get_domain("unknown.com")

    def test_malformed_domain_skipped(self):
        storage = MemoryStorage({DOMAINS_KEY: {"ok.com": {}, "bad.com": "nope"}})
        registry = ConfigRegistry(storage)
        registry.load()

        assert [d.name for d in registry.domains()] == ["ok.com"]

    def test_invalid_domain_values_skipped(self, caplog):
        storage = MemoryStorage({DOMAINS_KEY: {
            "ok.com": {"www": "Always"},
            "bad.com": {"www": "sometimes"},
            "odd.com": {"www": ["never"]},
        }})
        registry = ConfigRegistry(storage)

        with caplog.at_level("WARNING", logger="domainer.registry.registry"):
            registry.load()

        assert [d.name for d in registry.domains()] == ["ok.com"]
        assert registry.get_domain("ok.com", "www") == "always"
        assert "Skipping invalid config for domain 'bad.com'" in caplog.text
        assert registry.is_loaded

    @pytest.mark.parametrize("stored,field,expected", [
        ({"primary": "0"}, "primary", False),
        ({"active": "false"}, "active", False),
        ({"redirect": "no"}, "redirect", False),
        ({"secure": "on"}, "secure", True),
        ({"blog_id": "7"}, "blog_id", 7),
        ({"blog_id": "abc"}, "blog_id", 0),
    ])
    def test_loose_domain_values(self, stored, field, expected):
        storage = MemoryStorage({DOMAINS_KEY: {"a.com": stored}})
        registry = ConfigRegistry(storage)
        registry.load()

        assert registry.get_domain("a.com", field) == expected
        assert type(registry.get_domain("a.com", field)) is type(expected)

    @pytest.mark.parametrize("raw", ["1e999", "-1e999", float("nan"), float("inf")], ids=str)
    def test_out_of_range_number_falls_back_to_zero(self, raw):
        storage = MemoryStorage({OPTIONS_KEY: {"cookie_lifetime": raw}})
        registry = ConfigRegistry(storage)
        registry.load()

        assert registry.get("cookie_lifetime") == 0

    def test_empty_storage(self, storage):
        registry = ConfigRegistry(storage)
        registry.load()

        assert registry.domains() == []
        assert registry.all_options() == registry.get_defaults()


class TestSave:
    """Saving options and domains."""

    @pytest.mark.parametrize("value", [False, 7, "never", 2.5, ["a", "b"]], ids=str)
    def test_options_round_trip(self, storage, typed_specs, value):
        spec = next(s for s in typed_specs if isinstance(value, type(s.default)))
        registry = ConfigRegistry(storage, options=typed_specs, deprecations={})
        registry.load()
        registry.set(spec.name, value)
        registry.save("options")

        fresh = ConfigRegistry(storage, options=typed_specs, deprecations={})
        fresh.load(True)

        assert fresh.get(spec.name) == value
        assert type(fresh.get(spec.name)) is type(value)

    def test_save_options_only(self, registry, storage):
        registry.add_domain(Domain(name="example.com"))
        registry.save(SaveScope.OPTIONS)

        assert storage.load_blob(OPTIONS_KEY) is not None
        assert storage.load_blob(DOMAINS_KEY) is None

    def test_save_domains_only(self, registry, storage):
        registry.add_domain(Domain(name="example.com"))
        registry.save("domains")

        assert storage.load_blob(OPTIONS_KEY) is None
        assert "example.com" in storage.load_blob(DOMAINS_KEY)

    def test_save_domains_strips_name(self, registry, storage):
        registry.add_domain(Domain(name="example.com", blog_id=4, primary=True))
        registry.save("domains")

        config = storage.load_blob(DOMAINS_KEY)["example.com"]
        assert "name" not in config
        assert config["blog_id"] == 4
        assert config["primary"] is True

    def test_domains_round_trip(self, registry, storage):
        registry.add_domain(Domain(name="example.com", blog_id=4, primary=True, www="never"))
        registry.add_domain(Domain(name="alias.example.com", blog_id=4, redirect=False))
        registry.save("domains")

        fresh = ConfigRegistry(storage)
        fresh.load(True)

        assert fresh.domains() == registry.domains()
        assert fresh.get_domain("example.com", "name") == "example.com"

    @pytest.mark.parametrize("scope", [SaveScope.ALL, "all", True])
    def test_save_all(self, registry, storage, scope):
        registry.add_domain(Domain(name="example.com"))
        registry.save(scope)

        assert storage.load_blob(OPTIONS_KEY) is not None
        assert storage.load_blob(DOMAINS_KEY) is not None

    def test_save_default_is_all(self, registry, storage):
        registry.save()

        assert storage.writes == 2

    @pytest.mark.parametrize("scope", ["everything", False, None, 1])
    def test_invalid_scope(self, registry, scope):
        with pytest.raises(ValueError):
            registry.save(scope)
