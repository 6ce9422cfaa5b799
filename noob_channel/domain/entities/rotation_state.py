"""RotationState entity — counters and the channel currently handed out."""

from dataclasses import dataclass

from noob_channel.domain.value_objects.channel import ChannelDefinition


@dataclass
class RotationState:
    channel_sequence: int
    occupancy: int
    current_channel: ChannelDefinition

    def snapshot(self) -> tuple[int, int, ChannelDefinition]:
        return self.channel_sequence, self.occupancy, self.current_channel
