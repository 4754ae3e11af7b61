import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from brickfall.metrics import CascadeReport
from brickfall.pipeline import BrickfallRun, run
from brickfall.utils.logging import JsonlLogger

from samples import sample_pairs


class PipelineTest(unittest.TestCase):
    def test_run_sample(self) -> None:
        self.assertEqual(run(sample_pairs()), (5, 7))
        self.assertEqual(run(sample_pairs(), workers=3), (5, 7))

    def test_phases_are_lazy(self) -> None:
        sim = BrickfallRun(sample_pairs())
        report = sim.analyze()
        self.assertIsNotNone(sim.stack)
        self.assertIsNotNone(sim.graph)
        self.assertEqual(report.answers(), (5, 7))

    def test_analyzer_reads_graph_only(self) -> None:
        sim = BrickfallRun(sample_pairs())
        sim.build_graph()
        fake = CascadeReport(safe_count=1, total_cascade=2, cascade_sizes={0: 2})
        with patch("brickfall.pipeline.analyze", return_value=fake) as m:
            report = sim.analyze()
        m.assert_called_once_with(sim.graph, workers=1)
        self.assertIs(report, fake)

    def test_events_logged(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            path = Path(d) / "run.jsonl"
            with JsonlLogger(path, run_name="sample"):
                BrickfallRun(sample_pairs(), workers=2).run()
            records = [json.loads(ln) for ln in path.read_text(encoding="utf-8").splitlines()]

        self.assertEqual([r["type"] for r in records], ["settled", "support_graph", "cascade"])
        by_type = {r["type"]: r for r in records}
        self.assertEqual(by_type["settled"]["n_bricks"], 7)
        self.assertEqual(by_type["support_graph"]["n_edges"], 9)
        self.assertEqual(by_type["support_graph"]["n_floor"], 1)
        self.assertEqual(by_type["cascade"]["safe_count"], 5)
        self.assertEqual(by_type["cascade"]["total_cascade"], 7)
        self.assertEqual(by_type["cascade"]["workers"], 2)
        self.assertTrue(all(r["run"] == "sample" for r in records))

    def test_no_logger_is_fine(self) -> None:
        self.assertEqual(BrickfallRun(sample_pairs()).run().safe_count, 5)


if __name__ == "__main__":
    unittest.main()
