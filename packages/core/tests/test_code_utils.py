"""Tests for file filtering utilities."""

from gelf_core.utils.code import is_code_file, is_excluded, skip_reason


class TestIsCodeFile:
    def test_python_file_is_code(self):
        assert is_code_file("app/services/user.py") is True

    def test_go_file_is_code(self):
        assert is_code_file("cmd/main.go") is True

    def test_image_is_not_code(self):
        assert is_code_file("assets/logo.png") is False

    def test_font_is_not_code(self):
        assert is_code_file("static/fonts/Inter.woff2") is False

    def test_archive_is_not_code(self):
        assert is_code_file("dist/bundle.tar.gz") is False

    def test_lock_file_is_not_code(self):
        assert is_code_file("poetry.lock") is False
        assert is_code_file("Cargo.lock") is False

    def test_lockfile_without_lock_extension(self):
        assert is_code_file("web/package-lock.json") is False
        assert is_code_file("go.sum") is False
        assert is_code_file("web/package.json") is True

    def test_case_insensitive(self):
        assert is_code_file("image.PNG") is False


class TestIsExcluded:
    def test_no_patterns(self):
        assert is_excluded("src/app.py", []) is False

    def test_full_path_glob(self):
        assert is_excluded("src/generated/api.py", ["src/generated/*.py"]) is True

    def test_basename_glob(self):
        assert is_excluded("web/static/app.min.js", ["*.min.js"]) is True

    def test_directory_prefix(self):
        assert is_excluded("migrations/0001_initial.py", ["migrations/"]) is True

    def test_nested_directory(self):
        assert is_excluded("app/migrations/0002.py", ["migrations"]) is True

    def test_similar_name_not_excluded(self):
        assert is_excluded("src/migrations_helper.py", ["migrations/"]) is False


class TestSkipReason:
    def test_reviewable(self):
        assert skip_reason("src/app.py", ["vendor/"]) is None

    def test_excluded(self):
        assert skip_reason("vendor/lib.py", ["vendor/"]) == "matches an exclude pattern"

    def test_not_code(self):
        assert skip_reason("docs/diagram.png", []) == "not a code file"
