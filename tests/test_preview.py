import numpy as np

from contracts import Detection
from render.buffers import TriangleStripBuffers
from render.labels import LabelCollector
from render.preview import draw_curves, draw_labels, draw_overlay, ndc_to_image
from track.track_set import TrackSet


def _track_set() -> TrackSet:
    tracks = TrackSet()
    tracks.add_detections([Detection(id=0, center_x=20, center_y=50, radius=6)], 200, 100)
    tracks.add_detections(
        [Detection(id=1, predecessor_id=0, center_x=60, center_y=50, radius=6)], 200, 100
    )
    return tracks


def test_ndc_to_image_corners() -> None:
    pts = ndc_to_image(np.array([[-1.0, 1.0], [1.0, -1.0]]), 200, 100)
    assert pts.tolist() == [[0.0, 0.0], [200.0, 100.0]]


def test_curves_drawn_along_track() -> None:
    tracks = _track_set()
    buffers = TriangleStripBuffers(tracks.max_vertices())
    tracks.generate_curves(buffers)
    image = np.zeros((100, 200), dtype=np.uint8)

    out = draw_curves(image, buffers)

    assert out.shape == (100, 200, 3)
    assert out[50, 55].any()
    assert not out[10, 150].any()
    assert not image.any()


def test_empty_buffers_leave_frame_untouched() -> None:
    image = np.full((40, 40, 3), 7, dtype=np.uint8)
    out = draw_overlay(image, TriangleStripBuffers(4))
    assert np.array_equal(out, image)
    assert out is not image


def test_labels_drawn() -> None:
    tracks = _track_set()
    sink = LabelCollector()
    tracks.generate_labels(sink, 100)
    image = np.full((100, 200, 3), 255, dtype=np.uint8)

    out = draw_labels(image, sink.entries)

    # Backdrop darkens the legend area; the rest stays white
    assert out[47, 0].max() < 255
    assert (out[:, 100:] == 255).all()
