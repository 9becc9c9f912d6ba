from pathlib import Path
import textwrap

import pytest

from retrojanet.errors import OutputDirectoryError, SourceParseError
from retrojanet.orchestrator.pipeline import run_convert, start_convert


SERVICE = """
package com.example.api;

import com.example.model.User;
import retrofit2.http.*;

public interface UserService {
    @GET("/users/{id}")
    User getUser(@Path("id") long id);

    @Multipart
    @PUT("/users/{id}/photo")
    void upload(@Path("id") long id, @Part("photo") TypedFile photo);

    @POST("/search")
    void search(@QueryMap Map<String, String> options);

    User notAnEndpoint(String x);
}
"""


def write(p: Path, s: str) -> Path:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(textwrap.dedent(s), encoding="utf-8")
    return p


def test_run_convert_writes_one_file_per_endpoint(tmp_path: Path):
    src = write(tmp_path / "UserService.java", SERVICE)
    out = tmp_path / "out" / "nested"

    result = run_convert(src, output_dir=out)

    assert out.is_dir()
    assert result.package == "com.example.api"
    assert result.methods_seen == 4
    assert result.skipped == ["notAnEndpoint"]
    assert sorted(p.name for p in out.iterdir()) == [
        "GetUserAction.java",
        "SearchAction.java",
        "UploadAction.java",
    ]
    assert [f.method_name for f in result.files] == ["getUser", "upload", "search"]

    upload = (out / "UploadAction.java").read_text(encoding="utf-8")
    assert "import io.techery.janet.body.FileBody;" in upload
    assert "FileBody photo;" in upload
    assert (
        '@HttpAction(value = "/users/{id}/photo", type = HttpAction.Type.MULTIPART, '
        "method = HttpAction.Method.PUT)"
    ) in upload

    get_user = (out / "GetUserAction.java").read_text(encoding="utf-8")
    assert "import com.example.model.User;" in get_user
    assert "retrofit" not in get_user

    search = (out / "SearchAction.java").read_text(encoding="utf-8")
    assert "@QueryMap!!!//TODO" in search


def test_package_override(tmp_path: Path):
    src = write(tmp_path / "UserService.java", SERVICE)
    result = run_convert(src, package="com.example.actions", output_dir=tmp_path)
    assert result.package == "com.example.actions"
    text = (tmp_path / "GetUserAction.java").read_text(encoding="utf-8")
    assert text.startswith("package com.example.actions;\n")


def test_output_defaults_to_cwd(tmp_path: Path, monkeypatch):
    src = write(tmp_path / "src" / "UserService.java", SERVICE)
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)

    result = run_convert(src)
    assert result.output_dir == work.resolve()
    assert (work / "GetUserAction.java").exists()


def test_rerun_overwrites_deterministically(tmp_path: Path):
    src = write(tmp_path / "UserService.java", SERVICE)
    run_convert(src, output_dir=tmp_path / "out")
    first = (tmp_path / "out" / "GetUserAction.java").read_text(encoding="utf-8")

    (tmp_path / "out" / "GetUserAction.java").write_text("stale", encoding="utf-8")
    run_convert(src, output_dir=tmp_path / "out")
    assert (tmp_path / "out" / "GetUserAction.java").read_text(encoding="utf-8") == first


def test_files_are_written_one_at_a_time(tmp_path: Path):
    src = write(tmp_path / "UserService.java", SERVICE)
    out = tmp_path / "out"
    result, files = start_convert(src, output_dir=out)

    first = next(files)
    assert first.path.exists()
    assert not (out / "UploadAction.java").exists()
    assert len(result.files) == 1


def test_no_endpoints_writes_nothing(tmp_path: Path):
    src = write(
        tmp_path / "Plain.java",
        """
        interface Plain {
            String name();
        }
        """,
    )
    result = run_convert(src, output_dir=tmp_path / "out")
    assert result.files == []
    assert result.skipped == ["name"]
    assert not (tmp_path / "out").exists()


def test_unparsable_source_aborts(tmp_path: Path):
    src = write(tmp_path / "Broken.java", "interface Broken { @GET(\"/x\") void x( }")
    with pytest.raises(SourceParseError):
        run_convert(src, output_dir=tmp_path / "out")


def test_output_dir_under_a_file_aborts(tmp_path: Path):
    src = write(tmp_path / "UserService.java", SERVICE)
    blocker = write(tmp_path / "blocker", "not a directory")
    with pytest.raises(OutputDirectoryError):
        run_convert(src, output_dir=blocker / "sub")
