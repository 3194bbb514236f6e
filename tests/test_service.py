import io
import tempfile
import unittest
from pathlib import Path

from extprobe.config import ProbeConfig
from extprobe.errors import NetworkError, ParseError
from extprobe.run import ProbeService, RunState

from tests.catalog_fixtures import INDEX_URL, catalog_bytes, mock_client, status


def make_config(workspace: str, **overrides) -> ProbeConfig:
    return ProbeConfig(
        index_url=INDEX_URL,
        output_path=str(Path(workspace) / "index.min.json"),
        **overrides,
    )


class ProbeServiceTests(unittest.IsolatedAsyncioTestCase):
    async def test_probes_only_selected_language_in_order(self) -> None:
        routes = {
            INDEX_URL: status(200, catalog_bytes()),
            "https://manga-es.example": status(200),
            "https://mirror.manga-es.example": status(404),
            "https://manga-en.example": status(200),
        }
        seen = []
        out = io.StringIO()
        with tempfile.TemporaryDirectory() as tmpdir:
            config = make_config(tmpdir)
            async with mock_client(routes, seen) as client:
                service = ProbeService(config, client=client, out=out)
                reports = await service.run()

            self.assertTrue(Path(config.output_path).exists())

        self.assertEqual(RunState.DONE, service.state)
        self.assertEqual(2, len(reports))
        self.assertEqual(
            [
                f"File downloaded successfully to: {config.output_path}",
                "https://manga-es.example is available",
                "https://mirror.manga-es.example responded with 404",
            ],
            out.getvalue().splitlines(),
        )
        self.assertNotIn("https://manga-en.example", seen)

    async def test_second_run_returns_only_its_own_reports(self) -> None:
        routes = {
            INDEX_URL: status(200, catalog_bytes()),
            "https://manga-es.example": status(200),
            "https://mirror.manga-es.example": status(200),
        }
        with tempfile.TemporaryDirectory() as tmpdir:
            async with mock_client(routes) as client:
                service = ProbeService(make_config(tmpdir), client=client, out=io.StringIO())
                first = await service.run()
                second = await service.run()
                single = await service.probe_single("https://manga-es.example")

        self.assertEqual(2, len(first))
        self.assertEqual(2, len(second))
        self.assertEqual([single], service.reports)

    async def test_other_language_selects_other_sources(self) -> None:
        routes = {
            INDEX_URL: status(200, catalog_bytes()),
            "https://manga-en.example": status(500),
        }
        out = io.StringIO()
        with tempfile.TemporaryDirectory() as tmpdir:
            async with mock_client(routes) as client:
                service = ProbeService(make_config(tmpdir, lang="en"), client=client, out=out)
                await service.run()

        self.assertEqual("https://manga-en.example responded with 500",
                         out.getvalue().splitlines()[-1])

    async def test_unreachable_source_aborts_remaining_probes(self) -> None:
        # First es source does not resolve; the mirror must never be probed
        routes = {
            INDEX_URL: status(200, catalog_bytes()),
            "https://mirror.manga-es.example": status(200),
        }
        seen = []
        out = io.StringIO()
        with tempfile.TemporaryDirectory() as tmpdir:
            async with mock_client(routes, seen) as client:
                service = ProbeService(make_config(tmpdir), client=client, out=out)
                with self.assertRaises(NetworkError):
                    await service.run()

        self.assertEqual(RunState.FAILED, service.state)
        self.assertEqual([], service.reports)
        self.assertEqual(1, len(out.getvalue().splitlines()))
        self.assertNotIn("https://mirror.manga-es.example", seen)

    async def test_error_page_download_fails_at_parse(self) -> None:
        routes = {INDEX_URL: status(404, b"404: Not Found")}
        out = io.StringIO()
        with tempfile.TemporaryDirectory() as tmpdir:
            config = make_config(tmpdir)
            async with mock_client(routes) as client:
                service = ProbeService(config, client=client, out=out)
                with self.assertRaises(ParseError):
                    await service.run()

            self.assertEqual(b"404: Not Found", Path(config.output_path).read_bytes())

        self.assertEqual(RunState.FAILED, service.state)
        self.assertEqual(
            [f"File downloaded successfully to: {config.output_path}"],
            out.getvalue().splitlines(),
        )

    async def test_download_failure_produces_no_output(self) -> None:
        out = io.StringIO()
        with tempfile.TemporaryDirectory() as tmpdir:
            async with mock_client({}) as client:
                service = ProbeService(make_config(tmpdir), client=client, out=out)
                with self.assertRaises(NetworkError):
                    await service.run()

        self.assertEqual("", out.getvalue())

    async def test_no_matching_language_probes_nothing(self) -> None:
        seen = []
        out = io.StringIO()
        with tempfile.TemporaryDirectory() as tmpdir:
            async with mock_client({INDEX_URL: status(200, catalog_bytes())}, seen) as client:
                service = ProbeService(make_config(tmpdir, lang="pt-BR"), client=client, out=out)
                reports = await service.run()

        self.assertEqual([], reports)
        self.assertEqual([INDEX_URL], seen)
        self.assertEqual(RunState.DONE, service.state)

    async def test_probe_single_skips_catalog(self) -> None:
        seen = []
        out = io.StringIO()
        with tempfile.TemporaryDirectory() as tmpdir:
            config = make_config(tmpdir)
            async with mock_client({"https://one.example": status(200)}, seen) as client:
                service = ProbeService(config, client=client, out=out)
                report = await service.probe_single("https://one.example")

            self.assertFalse(Path(config.output_path).exists())

        self.assertTrue(report.available)
        self.assertEqual(["https://one.example"], seen)
        self.assertEqual("https://one.example is available\n", out.getvalue())


if __name__ == "__main__":
    unittest.main()
