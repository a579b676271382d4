import math
from dataclasses import asdict, dataclass

from stroop_experiment.responses import Response


@dataclass(frozen=True)
class BlockStats:
    congruent_correct: int = 0
    congruent_total: int = 0
    incongruent_correct: int = 0
    incongruent_total: int = 0
    congruent_avg_time_ms: float = 0.0  # mean over correct responses only
    incongruent_avg_time_ms: float = 0.0

    @property
    def total_correct(self) -> int:
        return self.congruent_correct + self.incongruent_correct

    @property
    def total(self) -> int:
        return self.congruent_total + self.incongruent_total

    @property
    def accuracy(self) -> float:
        return self.total_correct / self.total if self.total else 0.0

    def to_dict(self) -> dict:
        return {
            **asdict(self),
            "total_correct": self.total_correct,
            "total": self.total,
            "accuracy": self.accuracy,
        }


def _mean_correct_time_ms(responses: list[Response]) -> float:
    times = [r.response_time_ms for r in responses if r.is_correct]
    # fsum is exactly rounded -> independent of the order of the records
    return math.fsum(times) / len(times) if times else 0.0


def summarize(responses: list[Response]) -> BlockStats:
    """Accuracy and mean latency of correct responses, split by congruency"""
    congruent = [r for r in responses if r.stimulus.is_congruent]
    incongruent = [r for r in responses if not r.stimulus.is_congruent]

    return BlockStats(
        congruent_correct=sum(r.is_correct for r in congruent),
        congruent_total=len(congruent),
        incongruent_correct=sum(r.is_correct for r in incongruent),
        incongruent_total=len(incongruent),
        congruent_avg_time_ms=_mean_correct_time_ms(congruent),
        incongruent_avg_time_ms=_mean_correct_time_ms(incongruent),
    )


def stroop_effect_ms(stats: BlockStats) -> float:
    """Latency cost of incongruent over congruent stimuli"""
    return stats.incongruent_avg_time_ms - stats.congruent_avg_time_ms
