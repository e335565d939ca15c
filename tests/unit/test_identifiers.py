"""Unit tests for project identifier comparison."""

from restore_checker.utils.identifiers import IdentifierComparer, ProjectIdMap, ProjectIdSet


class TestIdentifierComparer:
    """Test comparer selection and keys."""

    def test_platform_defaults(self):
        assert IdentifierComparer.for_platform("linux").case_sensitive
        assert not IdentifierComparer.for_platform("win32").case_sensitive
        assert not IdentifierComparer.for_platform("darwin").case_sensitive

    def test_from_setting(self):
        assert IdentifierComparer.from_setting("sensitive").case_sensitive
        assert not IdentifierComparer.from_setting("insensitive").case_sensitive
        assert IdentifierComparer.from_setting("auto") == IdentifierComparer.for_platform()

    def test_equals(self):
        insensitive = IdentifierComparer(case_sensitive=False)
        sensitive = IdentifierComparer(case_sensitive=True)

        assert insensitive.equals("C:/Src/App.csproj", "c:/src/app.csproj")
        assert not sensitive.equals("C:/Src/App.csproj", "c:/src/app.csproj")


class TestProjectIdSet:
    """Test comparer-aware sets."""

    def test_insensitive_membership_keeps_first_spelling(self):
        ids = ProjectIdSet(IdentifierComparer(case_sensitive=False), ["/src/App.csproj"])
        ids.add("/SRC/APP.CSPROJ")

        assert len(ids) == 1
        assert "/src/app.csproj" in ids
        assert list(ids) == ["/src/App.csproj"]

    def test_sensitive_membership(self):
        ids = ProjectIdSet(IdentifierComparer(case_sensitive=True), ["/src/App.csproj"])
        ids.add("/SRC/APP.CSPROJ")

        assert len(ids) == 2

    def test_set_operations_keep_comparer(self):
        comparer = IdentifierComparer(case_sensitive=False)
        left = ProjectIdSet(comparer, ["/a.csproj"])
        left |= ["/A.csproj", "/b.csproj"]

        assert left == {"/a.csproj", "/b.csproj"}
        union = left | ProjectIdSet(comparer, ["/C.csproj"])
        assert isinstance(union, ProjectIdSet)
        assert "/c.csproj" in union

    def test_discard_and_clear(self):
        ids = ProjectIdSet(IdentifierComparer(case_sensitive=False), ["/a.csproj", "/b.csproj"])
        ids.discard("/A.CSPROJ")
        assert list(ids) == ["/b.csproj"]

        ids.clear()
        assert len(ids) == 0

    def test_non_string_is_not_member(self):
        ids = ProjectIdSet(IdentifierComparer(case_sensitive=True), ["/a.csproj"])
        assert 42 not in ids


class TestProjectIdMap:
    """Test comparer-aware mappings."""

    def test_lookup_ignores_case(self):
        mapping = ProjectIdMap(IdentifierComparer(case_sensitive=False))
        mapping["/src/App.csproj"] = 1
        mapping["/SRC/app.csproj"] = 2

        assert len(mapping) == 1
        assert mapping["/src/APP.csproj"] == 2
        assert list(mapping) == ["/src/App.csproj"]

    def test_get_missing_returns_default(self):
        mapping = ProjectIdMap(IdentifierComparer(case_sensitive=True), [("/a.csproj", 1)])

        assert mapping.get("/A.csproj") is None
        assert mapping.get("/a.csproj") == 1

    def test_delete(self):
        mapping = ProjectIdMap(IdentifierComparer(case_sensitive=False), [("/a.csproj", 1)])
        del mapping["/A.CSPROJ"]

        assert "/a.csproj" not in mapping
