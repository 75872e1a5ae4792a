"""Tests for the extraction pipeline steps"""

import os
import shutil

import pytest

from iconx import pipeline as pipeline_module
from iconx.config import ExtractorConfig
from iconx.errors import PipelineError, RepositoryError
from iconx.pipeline import ExtractionPipeline


@pytest.fixture
def fake_clone(icon_tree, monkeypatch):
    """Replace the git clone with a copy of icon_tree into <clone_dir>/icons."""
    calls = []

    def clone(repo_url, clone_dir):
        calls.append((repo_url, clone_dir))
        shutil.copytree(icon_tree, os.path.join(clone_dir, 'icons'))
        os.makedirs(os.path.join(clone_dir, '.git'))
        with open(os.path.join(clone_dir, 'README.md'), 'w') as f:
            f.write('devicon')

    monkeypatch.setattr(pipeline_module, 'clone_repository', clone)
    return calls


def make_config(tmp_path, **kwargs) -> ExtractorConfig:
    defaults = dict(
        repo_url='https://example.com/icons.git',
        clone_dir=str(tmp_path / 'clone'),
        icons_dir='icons',
        output_dir=str(tmp_path / 'out'),
    )
    defaults.update(kwargs)
    return ExtractorConfig(**defaults)


class TestSteps:
    def test_remote_steps(self, tmp_path):
        names = [s.name for s in ExtractionPipeline(make_config(tmp_path)).steps()]
        assert names == [
            'Clone repository',
            'Cleanup clone',
            'Create output directory',
            'Extract SVG icons',
            'Cleanup temporary files',
        ]

    def test_only_cleanup_is_non_fatal(self, tmp_path):
        steps = ExtractionPipeline(make_config(tmp_path)).steps()
        assert [s.name for s in steps if not s.fatal] == ['Cleanup temporary files']

    def test_keep_clone_skips_cleanup(self, tmp_path):
        names = [s.name for s in ExtractionPipeline(make_config(tmp_path), keep_clone=True).steps()]
        assert 'Cleanup temporary files' not in names

    def test_local_steps(self, tmp_path):
        names = [s.name for s in ExtractionPipeline(make_config(tmp_path), icons_path=str(tmp_path)).steps()]
        assert names == ['Create output directory', 'Extract SVG icons']


class TestRemoteRun:
    def test_full_run(self, tmp_path, fake_clone):
        config = make_config(tmp_path)

        result = ExtractionPipeline(config).run()

        assert fake_clone == [('https://example.com/icons.git', str(tmp_path / 'clone'))]
        assert result.processed == 4
        assert result.skipped == 1
        assert sorted(os.listdir(tmp_path / 'out')) == ['go.svg', 'python.svg', 'react.svg', 'rust.svg']
        assert not (tmp_path / 'clone').exists()

    def test_keep_clone(self, tmp_path, fake_clone):
        ExtractionPipeline(make_config(tmp_path), keep_clone=True).run()

        assert os.listdir(tmp_path / 'clone') == ['icons']

    def test_stale_output_removed(self, tmp_path, fake_clone):
        out = tmp_path / 'out'
        out.mkdir()
        (out / 'obsolete.svg').write_text('<svg/>')

        ExtractionPipeline(make_config(tmp_path)).run()

        assert not (out / 'obsolete.svg').exists()

    def test_clone_failure_is_fatal(self, tmp_path, monkeypatch):
        def failing_clone(repo_url, clone_dir):
            raise RepositoryError('failed to clone repository: exit code 128')

        monkeypatch.setattr(pipeline_module, 'clone_repository', failing_clone)

        with pytest.raises(PipelineError) as exc_info:
            ExtractionPipeline(make_config(tmp_path)).run()

        assert exc_info.value.step == 'Clone repository'
        assert str(exc_info.value).startswith('Clone repository failed:')
        assert not (tmp_path / 'out').exists()

    def test_missing_icons_dir_is_fatal(self, tmp_path, fake_clone):
        config = make_config(tmp_path, icons_dir='svg')

        with pytest.raises(PipelineError) as exc_info:
            ExtractionPipeline(config).run()

        assert exc_info.value.step == 'Cleanup clone'

    def test_cleanup_failure_is_not_fatal(self, tmp_path, fake_clone, monkeypatch):
        def failing_cleanup(clone_dir):
            raise OSError('failed to cleanup clone directory: busy')

        monkeypatch.setattr(pipeline_module, 'cleanup_clone', failing_cleanup)

        result = ExtractionPipeline(make_config(tmp_path)).run()

        assert result.processed == 4
        assert (tmp_path / 'clone').exists()


class TestLocalRun:
    def test_local_run(self, tmp_path, icon_tree):
        config = make_config(tmp_path)

        result = ExtractionPipeline(config, icons_path=str(icon_tree)).run()

        assert result.icons_path == str(icon_tree)
        assert result.processed + result.skipped == 5
        assert (tmp_path / 'out' / 'react.svg').read_bytes() == (
            icon_tree / 'react' / 'react-original.svg'
        ).read_bytes()
        # source tree untouched
        assert (icon_tree / 'README.md').exists()

    def test_missing_icons_path_keeps_output(self, tmp_path):
        out = tmp_path / 'out'
        out.mkdir()
        (out / 'keep.svg').write_text('<svg/>')

        with pytest.raises(PipelineError) as exc_info:
            ExtractionPipeline(make_config(tmp_path), icons_path=str(tmp_path / 'missing')).run()

        assert exc_info.value.step == 'Create output directory'
        assert (out / 'keep.svg').exists()

    def test_output_inside_source_is_rejected(self, tmp_path, icon_tree):
        config = make_config(tmp_path, output_dir=str(icon_tree / 'out'))

        with pytest.raises(PipelineError, match='overlaps'):
            ExtractionPipeline(config, icons_path=str(icon_tree)).run()

        assert (icon_tree / 'react' / 'react-original.svg').exists()

    def test_output_equal_to_source_is_rejected(self, tmp_path, icon_tree):
        config = make_config(tmp_path, output_dir=str(icon_tree))

        with pytest.raises(PipelineError):
            ExtractionPipeline(config, icons_path=str(icon_tree)).run()

        assert (icon_tree / 'go' / 'go.svg').exists()
