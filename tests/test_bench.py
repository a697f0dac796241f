import numpy as np
import pytest

from llc_probe.bench import CHUNK, Sample, allocate, random_access, run_sweep, stride_sweep


class TestAllocate:
    @pytest.mark.parametrize("element_size", [1, 4, 12, 64, 128])
    def test_holds_requested_bytes(self, element_size):
        arr = allocate(4096 * 3, element_size)
        assert arr.nbytes == (4096 * 3 // element_size) * element_size
        assert arr.shape[1] == element_size

    def test_at_least_one_element(self):
        assert allocate(8, 64).shape == (1, 64)

    def test_invalid_element_size(self):
        with pytest.raises(ValueError):
            allocate(1024, 0)


class TestRandomAccess:
    def test_elapsed_non_negative(self, rng):
        elapsed = random_access(4096, 1000, rng)
        assert isinstance(elapsed, int)
        assert elapsed >= 0

    def test_size_smaller_than_element(self, rng):
        assert random_access(8, 100, rng) >= 0

    def test_index_batch_fits_in_l1(self):
        assert CHUNK * np.dtype(np.int64).itemsize <= 32 * 1024

    def test_draws_indices_in_small_batches(self):
        class RecordingRng:
            def __init__(self):
                self.rng = np.random.default_rng(3)
                self.sizes = []

            def integers(self, *args, **kwargs):
                self.sizes.append(kwargs["size"])
                return self.rng.integers(*args, **kwargs)

        rng = RecordingRng()
        random_access(2**20, 3 * CHUNK + 5, rng)
        assert rng.sizes == [CHUNK, CHUNK, CHUNK, 5]

    def test_odd_element_size(self, rng):
        assert random_access(4096, 10, rng, element_size=4) >= 0

    def test_chunked_iterations(self, rng, monkeypatch):
        monkeypatch.setattr("llc_probe.bench.CHUNK", 7)
        assert random_access(1024, 50, rng) >= 0

    @pytest.mark.parametrize("size, iterations", [(0, 10), (1024, 0)])
    def test_invalid(self, rng, size, iterations):
        with pytest.raises(ValueError):
            random_access(size, iterations, rng)

    @pytest.mark.slow
    def test_large_buffer_not_faster(self):
        rng = np.random.default_rng(7)
        iterations = 2**20
        small = min(random_access(4 * 1024, iterations, rng) for _ in range(3))
        large = min(random_access(256 * 2**20, iterations, rng) for _ in range(3))
        # Noisy, so only require the large buffer not to be clearly faster.
        assert large / iterations >= 0.8 * small / iterations


class TestRunSweep:
    def test_pairs_sizes_with_average_latency(self, rng):
        calls = []

        def fake(size, iterations, rng):
            calls.append(size)
            return size * iterations // 1024

        series = run_sweep([1024, 4096, 2048], 10, rng, benchmark=fake)
        assert calls == [1024, 4096, 2048]
        assert series == [Sample(1024, 1.0), Sample(4096, 4.0), Sample(2048, 2.0)]

    def test_real_benchmark(self, rng):
        series = run_sweep([1024, 2048], 100, rng)
        assert [s.size for s in series] == [1024, 2048]
        assert all(s.latency >= 0 for s in series)

    def test_logs_progress(self, rng, caplog):
        with caplog.at_level("INFO", logger="llc_probe.bench"):
            run_sweep([2048], 4, rng, benchmark=lambda size, iterations, rng: 8)
        assert "Size: 2.0 KiB" in caplog.text
        assert "8ns" in caplog.text

    def test_samples_are_frozen(self):
        sample = Sample(1024, 1.0)
        with pytest.raises(AttributeError):
            sample.size = 2048


class TestStrideSweep:
    def test_one_sample_per_stride(self):
        series = stride_sweep(length=4096, max_stride=5)
        assert [s.size for s in series] == [1, 2, 3, 4, 5]
        assert all(s.latency >= 0 for s in series)
