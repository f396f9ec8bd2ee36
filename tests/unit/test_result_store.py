"""Tests for the organization result store."""

from autoorganize.models import FileSortingStatus, OrganizationResult
from autoorganize.utils.hash import path_id
from autoorganize.utils.result_store import ResultStore


def make_result(path="/in/Show.S01E02.mkv", **kwargs):
    return OrganizationResult(original_path=path, original_file_name=path.rsplit("/", 1)[-1], **kwargs)


class TestResultStorePersistence:
    """Tests for saving and loading results."""

    def test_save_assigns_id(self, result_store):
        result = make_result()
        result_store.save(result)
        assert result.id == path_id("/in/Show.S01E02.mkv")

    def test_round_trip(self, result_store):
        result = make_result(
            file_size=42,
            extracted_name="Show",
            extracted_year=2010,
            extracted_season_number=1,
            extracted_episode_number=2,
            target_path="/lib/Show/Season 01/Show S01E02.mkv",
            duplicate_paths=["/lib/a.avi", "/lib/b.mkv"],
        )
        result.mark(FileSortingStatus.SKIPPED_EXISTING, "exists")
        result_store.save(result)

        loaded = result_store.get_by_id(result.id)

        assert loaded == result
        assert loaded is not result

    def test_pending_status(self, result_store):
        result = make_result()
        result_store.save(result)
        assert result_store.get_by_id(result.id).status is None

    def test_get_by_source_path(self, result_store):
        result = make_result()
        result_store.save(result)
        assert result_store.get_by_source_path("/in/Show.S01E02.mkv").id == result.id
        assert result_store.get_by_source_path("/in/other.mkv") is None

    def test_one_record_per_source_path(self, result_store):
        first = make_result()
        first.mark(FileSortingStatus.FAILURE, "first")
        result_store.save(first)

        second = make_result()
        second.mark(FileSortingStatus.SUCCESS)
        result_store.save(second)

        results = result_store.list_results()
        assert len(results) == 1
        assert results[0].status == FileSortingStatus.SUCCESS

    def test_list_results(self, result_store):
        result_store.save(make_result("/in/a.mkv"))
        result_store.save(make_result("/in/b.mkv"))
        assert {r.original_path for r in result_store.list_results()} == {"/in/a.mkv", "/in/b.mkv"}

    def test_delete(self, result_store):
        result = make_result()
        result_store.save(result)
        result_store.delete(result.id)
        assert result_store.get_by_id(result.id) is None

    def test_persisted_across_connections(self, tmp_path):
        db_path = tmp_path / "results.db"
        with ResultStore(db_path) as store:
            result = make_result()
            store.save(result)
        with ResultStore(db_path) as store:
            assert store.get_by_id(result.id) is not None


class TestInProgressRegistry:
    """Tests for try_begin / end."""

    def test_begin_and_end(self, result_store):
        result = make_result()
        assert result_store.try_begin(result, True)
        assert result_store.is_in_progress(result.original_path)
        result_store.end(result)
        assert not result_store.is_in_progress(result.original_path)

    def test_second_begin_refused(self, result_store):
        assert result_store.try_begin(make_result(), True)
        assert not result_store.try_begin(make_result(), False)

    def test_other_paths_independent(self, result_store):
        assert result_store.try_begin(make_result("/in/a.mkv"), True)
        assert result_store.try_begin(make_result("/in/b.mkv"), True)

    def test_end_unknown_is_noop(self, result_store):
        result_store.end(make_result())
