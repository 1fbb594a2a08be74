import logging
import random
from pathlib import Path

from orrery.core.config import SimulationConfig, configure_logging, load_bodies_file
from orrery.simulation.scenario import Scenario
from orrery.simulation.engine import Engine, FrameClock
from orrery.simulation.systems.transform_recorder import TransformRecorderSystem
from orrery.visualization.plotly_viewer import render_orrery_playback
from orrery.visualization.export_log import export_playback_bundle

configure_logging(logging.INFO)
log = logging.getLogger("orrery_demo")

config = SimulationConfig()
records = load_bodies_file(Path(__file__).resolve().parent.parent / "data" / "solar_system.json")

scenario = Scenario(name="Inner Solar System")
rejected = scenario.add_from_configs(records, config=config, rng=random.Random(42))
if rejected:
    log.warning("Skipped bodies: %s", ", ".join(rejected))

# A few live-style frames at ~60 Hz, with one dropped frame
clock = FrameClock()
for dt in [1 / 60, 1 / 60, 3 / 60, 1 / 60]:
    t = clock.advance(dt)
    earth = scenario.bodies["Earth"].tick(t)
    log.info("t=%.3fs Earth at %s spin %.3f rad", t, earth.position, earth.rotation_angle)

engine = Engine(dt_s=0.5, systems=[TransformRecorderSystem()])
sim_log = engine.run(scenario, t_start_s=0.0, t_end_s=120.0)

bundle_path = export_playback_bundle(sim_log, out_path="out/orrery_bundle.json", scenario=scenario)
log.info("Exported bundle: %s", bundle_path)

path = render_orrery_playback(sim_log, out_html="out/orrery.html", scenario=scenario, frame_stride=2)
log.info("Wrote: %s", path)
