"""
Tests for depthai pipeline assembly and spatial algorithm selection.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from models.config import Config
from observation.depthai_source import DepthAISource
from pipeline.spatial import parse_spatial_algorithm


class TestParseSpatialAlgorithm:
    @pytest.mark.parametrize("name,expected", [
        ("average", "AVERAGE"),
        ("mean", "AVERAGE"),
        ("min", "MIN"),
        ("max", "MAX"),
        ("mode", "MODE"),
        ("median", "MEDIAN"),
        ("MEDIAN", "MEDIAN"),
        (" Max ", "MAX"),
    ])
    def test_known_names(self, name, expected):
        assert parse_spatial_algorithm(name) == expected

    def test_unknown_name_falls_back_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_spatial_algorithm("trimmed") == "AVERAGE"
        assert "trimmed" in caplog.text

    def test_empty_name_falls_back(self):
        assert parse_spatial_algorithm("") == "AVERAGE"


@pytest.fixture
def mock_dai():
    """Replace the depthai module used by the builder and record created nodes."""
    with patch("pipeline.builder.dai") as dai:
        created = []

        def create(node_type):
            node = MagicMock()
            created.append((node_type, node))
            return node

        dai.Pipeline.return_value.create.side_effect = create
        dai.created = created
        yield dai


def created_node(dai, node_type):
    nodes = [node for t, node in dai.created if t is node_type]
    assert len(nodes) == 1
    return nodes[0]


class TestBuildPipeline:
    def test_configures_spatial_network(self, mock_dai):
        from pipeline.builder import build_pipeline

        config = Config.from_dict({
            "camera": {"resolution": [640, 400], "fps": 15.0},
            "model": {"name": "yolov6-nano"},
            "spatial": {
                "box_scale": 0.3,
                "lower_threshold": 200,
                "upper_threshold": 8000,
                "algorithm": "median",
                "step_size": 2,
            },
        })
        sdn_type = mock_dai.node.SpatialDetectionNetwork

        source = build_pipeline(config)

        sdn = created_node(mock_dai, sdn_type)
        sdn.input.setBlocking.assert_called_once_with(False)
        sdn.setBoundingBoxScaleFactor.assert_called_once_with(0.3)
        sdn.setDepthLowerThreshold.assert_called_once_with(200)
        sdn.setDepthUpperThreshold.assert_called_once_with(8000)
        sdn.setSpatialCalculationStepSize.assert_called_once_with(2)
        sdn.setSpatialCalculationAlgorithm.assert_called_once_with(
            mock_dai.SpatialLocationCalculatorAlgorithm.MEDIAN
        )
        build_args = sdn.build.call_args
        assert build_args.kwargs["fps"] == 15.0
        assert build_args.args[2].model == "yolov6-nano"

        stereo = created_node(mock_dai, mock_dai.node.StereoDepth)
        stereo.setOutputSize.assert_called_once_with(640, 400)
        stereo.setExtendedDisparity.assert_called_once_with(True)

        assert isinstance(source, DepthAISource)
        mock_dai.Pipeline.return_value.start.assert_not_called()

    def test_three_cameras(self, mock_dai):
        from pipeline.builder import build_pipeline

        build_pipeline(Config())

        cameras = [node for t, node in mock_dai.created if t is mock_dai.node.Camera]
        assert len(cameras) == 3

    def test_label_map_from_network(self, mock_dai):
        from pipeline.builder import build_pipeline

        def create(node_type):
            node = MagicMock()
            node.getClasses.return_value = ["person", "bottle"]
            mock_dai.created.append((node_type, node))
            return node

        mock_dai.Pipeline.return_value.create.side_effect = create

        source = build_pipeline(Config())

        assert source.label_map == ["person", "bottle"]

    def test_label_map_from_config(self, mock_dai):
        from pipeline.builder import build_pipeline

        config = Config.from_dict({"model": {"name": "custom", "labels": ["cone"]}})
        source = build_pipeline(config)

        assert source.label_map == ["cone"]

    def test_missing_network_labels(self, mock_dai, caplog):
        from pipeline.builder import build_pipeline

        def create(node_type):
            node = MagicMock()
            node.getClasses.return_value = None
            mock_dai.created.append((node_type, node))
            return node

        mock_dai.Pipeline.return_value.create.side_effect = create

        with caplog.at_level(logging.WARNING):
            source = build_pipeline(Config())

        assert source.label_map == []
        assert "no class labels" in caplog.text

    def test_unknown_algorithm_uses_average(self, mock_dai):
        from pipeline.builder import build_pipeline

        config = Config.from_dict({"spatial": {"algorithm": "bogus"}})
        build_pipeline(config)

        sdn = created_node(mock_dai, mock_dai.node.SpatialDetectionNetwork)
        sdn.setSpatialCalculationAlgorithm.assert_called_once_with(
            mock_dai.SpatialLocationCalculatorAlgorithm.AVERAGE
        )
