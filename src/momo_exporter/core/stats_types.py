"""Projection tables for the WebRTC stats report types.

Field names follow the RTC*Stats dictionaries of
https://www.w3.org/TR/webrtc-stats/. Metric names are prefixed with the
report type; the ``momo`` namespace is added by the collector.
"""

from dataclasses import replace

from momo_exporter.core.metrics import counter, flag, gauge, label
from momo_exporter.core.models import FieldSpec, LabelSpec, ReportProjection, ValueType

FLOAT = ValueType.FLOAT
INT = ValueType.INT


def _projection(
    report_type: str,
    prefix: str,
    fields: tuple[FieldSpec, ...],
    labels: tuple[LabelSpec, ...],
) -> ReportProjection:
    return ReportProjection(
        report_type=report_type,
        fields=tuple(
            replace(spec, metric_name=f"{prefix}_{spec.metric_name}") for spec in fields
        ),
        label_fields=labels,
    )


_RTP_STREAM_LABELS = (
    label("id", "id"),
    label("ssrc", "ssrc", INT),
    label("kind", "kind"),
)

# RTCReceivedRtpStreamStats
_RECEIVED_RTP_FIELDS = (
    counter("packetsReceived", "packets_received_total", "Total RTP packets received."),
    gauge("packetsLost", "packets_lost", "Total RTP packets lost (may be negative).", INT),
    gauge("jitter", "jitter_seconds", "Packet jitter in seconds."),
    counter("packetsDiscarded", "packets_discarded_total", "RTP packets discarded by the jitter buffer."),
    counter("packetsRepaired", "packets_repaired_total", "Lost RTP packets repaired."),
    counter("burstPacketsLost", "burst_packets_lost_total", "RTP packets lost during loss bursts."),
    counter("burstPacketsDiscarded", "burst_packets_discarded_total", "RTP packets discarded during discard bursts."),
    counter("burstLossCount", "burst_loss_count_total", "Bursts of lost RTP packets."),
    counter("burstDiscardCount", "burst_discard_count_total", "Bursts of discarded RTP packets."),
    gauge("burstLossRate", "burst_loss_rate", "Fraction of packets lost during bursts."),
    gauge("burstDiscardRate", "burst_discard_rate", "Fraction of packets discarded during bursts."),
    gauge("gapLossRate", "gap_loss_rate", "Fraction of packets lost during gaps."),
    gauge("gapDiscardRate", "gap_discard_rate", "Fraction of packets discarded during gaps."),
    counter("framesDropped", "frames_dropped_total", "Frames dropped before decoding."),
    counter("partialFramesLost", "partial_frames_lost_total", "Partially lost frames."),
    counter("fullFramesLost", "full_frames_lost_total", "Fully lost frames."),
)

CODEC = ReportProjection(
    report_type="codec",
    fields=(
        gauge("payloadType", "codec_{id}", "RTP payload type of the codec.", INT),
    ),
    label_fields=(
        label("id", "id"),
        label("payloadType", "payload_type", INT),
        label("mimeType", "mime_type"),
        label("clockRate", "clock_rate", INT),
    ),
)

OUTBOUND_RTP = _projection(
    "outbound-rtp",
    "outbound_rtp",
    fields=(
        counter("packetsSent", "packets_sent_total", "Total RTP packets sent."),
        counter("bytesSent", "bytes_sent_total", "Total RTP payload bytes sent."),
        counter("headerBytesSent", "header_bytes_sent_total", "Total RTP header and padding bytes sent."),
        counter("packetsDiscardedOnSend", "packets_discarded_on_send_total", "RTP packets discarded due to socket errors."),
        counter("bytesDiscardedOnSend", "bytes_discarded_on_send_total", "Bytes discarded due to socket errors."),
        counter("fecPacketsSent", "fec_packets_sent_total", "RTP FEC packets sent."),
        counter("retransmittedPacketsSent", "retransmitted_packets_sent_total", "Packets retransmitted."),
        counter("retransmittedBytesSent", "retransmitted_bytes_sent_total", "Payload bytes retransmitted."),
        gauge("targetBitrate", "target_bitrate_bps", "Current encoder target bitrate."),
        counter("totalEncodedBytesTarget", "total_encoded_bytes_target_total", "Sum of encoder target frame sizes."),
        gauge("frameWidth", "frame_width", "Width of the last encoded frame.", INT),
        gauge("frameHeight", "frame_height", "Height of the last encoded frame.", INT),
        gauge("frameBitDepth", "frame_bit_depth", "Bit depth of the last encoded frame.", INT),
        gauge("framesPerSecond", "frames_per_second", "Encoded frames during the last second."),
        counter("framesSent", "frames_sent_total", "Frames sent."),
        counter("hugeFramesSent", "huge_frames_sent_total", "Huge frames sent."),
        counter("framesEncoded", "frames_encoded_total", "Frames successfully encoded."),
        counter("keyFramesEncoded", "key_frames_encoded_total", "Key frames successfully encoded."),
        counter("framesDiscardedOnSend", "frames_discarded_on_send_total", "Frames discarded due to socket errors."),
        counter("qpSum", "qp_sum_total", "Sum of QP values of encoded frames."),
        counter("totalSamplesSent", "total_samples_sent_total", "Audio samples sent."),
        counter("samplesEncodedWithSilk", "samples_encoded_with_silk_total", "Audio samples encoded with SILK."),
        counter("samplesEncodedWithCelt", "samples_encoded_with_celt_total", "Audio samples encoded with CELT."),
        flag("voiceActivityFlag", "voice_activity", "Whether the last packet carried voice activity."),
        counter("totalEncodeTime", "encode_time_seconds_total", "Time spent encoding frames.", FLOAT),
        counter("totalPacketSendDelay", "packet_send_delay_seconds_total", "Time packets spent buffered before sending.", FLOAT),
        gauge("averageRtcpInterval", "average_rtcp_interval_seconds", "Average RTCP interval."),
        counter("qualityLimitationResolutionChanges", "quality_limitation_resolution_changes_total", "Resolution changes due to quality limitation."),
        counter("nackCount", "nack_count_total", "NACK packets received."),
        counter("firCount", "fir_count_total", "FIR packets received."),
        counter("pliCount", "pli_count_total", "PLI packets received."),
        counter("sliCount", "sli_count_total", "SLI packets received."),
        gauge("lastPacketSentTimestamp", "last_packet_sent_timestamp", "Timestamp of the last packet sent."),
    ),
    labels=_RTP_STREAM_LABELS,
)

INBOUND_RTP = _projection(
    "inbound-rtp",
    "inbound_rtp",
    fields=_RECEIVED_RTP_FIELDS
    + (
        counter("framesDecoded", "frames_decoded_total", "Frames correctly decoded."),
        counter("keyFramesDecoded", "key_frames_decoded_total", "Key frames correctly decoded."),
        gauge("frameWidth", "frame_width", "Width of the last decoded frame.", INT),
        gauge("frameHeight", "frame_height", "Height of the last decoded frame.", INT),
        gauge("frameBitDepth", "frame_bit_depth", "Bit depth of the last decoded frame.", INT),
        gauge("framesPerSecond", "frames_per_second", "Decoded frames during the last second."),
        counter("qpSum", "qp_sum_total", "Sum of QP values of decoded frames."),
        counter("totalDecodeTime", "decode_time_seconds_total", "Time spent decoding frames.", FLOAT),
        counter("totalInterFrameDelay", "inter_frame_delay_seconds_total", "Sum of inter-frame delays.", FLOAT),
        counter("totalSquaredInterFrameDelay", "squared_inter_frame_delay_seconds_total", "Sum of squared inter-frame delays.", FLOAT),
        flag("voiceActivityFlag", "voice_activity", "Whether the last packet carried voice activity."),
        gauge("lastPacketReceivedTimestamp", "last_packet_received_timestamp", "Timestamp of the last packet received."),
        gauge("averageRtcpInterval", "average_rtcp_interval_seconds", "Average RTCP interval."),
        counter("headerBytesReceived", "header_bytes_received_total", "Total RTP header and padding bytes received."),
        counter("fecPacketsReceived", "fec_packets_received_total", "RTP FEC packets received."),
        counter("fecPacketsDiscarded", "fec_packets_discarded_total", "RTP FEC packets discarded."),
        counter("bytesReceived", "bytes_received_total", "Total RTP payload bytes received."),
        counter("packetsFailedDecryption", "packets_failed_decryption_total", "RTP packets that failed decryption."),
        counter("packetsDuplicated", "packets_duplicated_total", "Duplicate RTP packets discarded."),
        counter("nackCount", "nack_count_total", "NACK packets sent."),
        counter("firCount", "fir_count_total", "FIR packets sent."),
        counter("pliCount", "pli_count_total", "PLI packets sent."),
        counter("sliCount", "sli_count_total", "SLI packets sent."),
        counter("totalProcessingDelay", "processing_delay_seconds_total", "Time between receiving and decoding frames.", FLOAT),
        gauge("estimatedPlayoutTimestamp", "estimated_playout_timestamp", "Estimated playout time of the track."),
        counter("jitterBufferDelay", "jitter_buffer_delay_seconds_total", "Time samples spent in the jitter buffer.", FLOAT),
        counter("jitterBufferEmittedCount", "jitter_buffer_emitted_count_total", "Samples emitted by the jitter buffer."),
        counter("totalSamplesReceived", "total_samples_received_total", "Audio samples received."),
        counter("samplesDecodedWithSilk", "samples_decoded_with_silk_total", "Audio samples decoded with SILK."),
        counter("samplesDecodedWithCelt", "samples_decoded_with_celt_total", "Audio samples decoded with CELT."),
        counter("concealedSamples", "concealed_samples_total", "Concealed audio samples."),
        counter("silentConcealedSamples", "silent_concealed_samples_total", "Silent concealed audio samples."),
        counter("concealmentEvents", "concealment_events_total", "Concealment events."),
        counter("insertedSamplesForDeceleration", "inserted_samples_for_deceleration_total", "Samples inserted to slow playout."),
        counter("removedSamplesForAcceleration", "removed_samples_for_acceleration_total", "Samples removed to speed up playout."),
        gauge("audioLevel", "audio_level", "Audio level of the received track."),
        counter("totalAudioEnergy", "audio_energy_total", "Accumulated audio energy.", FLOAT),
        counter("totalSamplesDuration", "samples_duration_seconds_total", "Accumulated audio sample duration.", FLOAT),
        counter("framesReceived", "frames_received_total", "Complete frames received."),
    ),
    labels=_RTP_STREAM_LABELS,
)

REMOTE_INBOUND_RTP = _projection(
    "remote-inbound-rtp",
    "remote_inbound_rtp",
    fields=_RECEIVED_RTP_FIELDS
    + (
        gauge("roundTripTime", "last_round_trip_time_seconds", "Last round trip time estimate."),
        counter("totalRoundTripTime", "round_trip_time_seconds_total", "Sum of round trip time measurements.", FLOAT),
        gauge("fractionLost", "fraction_lost", "Fraction lost reported in the last RTCP RR."),
        counter("reportsReceived", "reports_received_total", "RTCP RR blocks received."),
        counter("roundTripTimeMeasurements", "round_trip_time_measurements_total", "Valid round trip time measurements."),
    ),
    labels=_RTP_STREAM_LABELS,
)

REMOTE_OUTBOUND_RTP = _projection(
    "remote-outbound-rtp",
    "remote_outbound_rtp",
    fields=(
        counter("packetsSent", "packets_sent_total", "RTP packets sent by the remote endpoint."),
        counter("bytesSent", "bytes_sent_total", "RTP payload bytes sent by the remote endpoint."),
        gauge("remoteTimestamp", "remote_timestamp", "Remote timestamp of the last RTCP SR."),
        counter("reportsSent", "reports_sent_total", "RTCP SR blocks sent by the remote endpoint."),
    ),
    labels=_RTP_STREAM_LABELS,
)

MEDIA_SOURCE = _projection(
    "media-source",
    "media_source",
    fields=(
        flag("relayedSource", "relayed_source", "Whether the source is relayed from a remote track."),
        gauge("audioLevel", "audio_level", "Audio level of the source."),
        counter("totalAudioEnergy", "audio_energy_total", "Accumulated audio energy.", FLOAT),
        counter("totalSamplesDuration", "samples_duration_seconds_total", "Accumulated audio sample duration.", FLOAT),
        gauge("echoReturnLoss", "echo_return_loss_db", "Echo return loss."),
        gauge("echoReturnLossEnhancement", "echo_return_loss_enhancement_db", "Echo return loss enhancement."),
        gauge("width", "width", "Width of the last source frame.", INT),
        gauge("height", "height", "Height of the last source frame.", INT),
        gauge("bitDepth", "bit_depth", "Bit depth of the last source frame.", INT),
        counter("frames", "frames_total", "Frames originating from the source."),
        gauge("framesPerSecond", "frames_per_second", "Source frames during the last second."),
    ),
    labels=(
        label("id", "id"),
        label("kind", "kind"),
        label("trackIdentifier", "track_identifier"),
    ),
)

PEER_CONNECTION = _projection(
    "peer-connection",
    "peer_connection",
    fields=(
        counter("dataChannelsOpened", "data_channels_opened_total", "Data channels opened."),
        counter("dataChannelsClosed", "data_channels_closed_total", "Data channels closed."),
        counter("dataChannelsRequested", "data_channels_requested_total", "Data channels requested."),
        counter("dataChannelsAccepted", "data_channels_accepted_total", "Data channels accepted."),
    ),
    labels=(label("id", "id"),),
)

DATA_CHANNEL = _projection(
    "data-channel",
    "datachannel",
    fields=(
        counter("bytesSent", "bytes_sent_total", "Payload bytes sent on the data channel."),
        counter("bytesReceived", "bytes_received_total", "Payload bytes received on the data channel."),
        counter("messagesSent", "messages_sent_total", "API message events sent."),
        counter("messagesReceived", "messages_received_total", "API message events received."),
    ),
    labels=(
        label("id", "id"),
        label("label", "label"),
    ),
)

TRANSPORT = _projection(
    "transport",
    "transport",
    fields=(
        counter("packetsSent", "packets_sent_total", "Packets sent over the transport."),
        counter("packetsReceived", "packets_received_total", "Packets received on the transport."),
        counter("bytesSent", "bytes_sent_total", "Payload bytes sent over the transport."),
        counter("bytesReceived", "bytes_received_total", "Payload bytes received on the transport."),
        counter("selectedCandidatePairChanges", "selected_candidate_pair_changes_total", "Changes of the selected candidate pair."),
    ),
    labels=(label("id", "id"),),
)

SCTP_TRANSPORT = _projection(
    "sctp-transport",
    "sctp_transport",
    fields=(
        gauge("smoothedRoundTripTime", "smoothed_round_trip_time_seconds", "Smoothed round trip time."),
        gauge("congestionWindow", "congestion_window_bytes", "SCTP congestion window.", INT),
        gauge("receiverWindow", "receiver_window_bytes", "SCTP receiver window.", INT),
        gauge("mtu", "mtu_bytes", "Maximum transmission unit.", INT),
        gauge("unackData", "unack_data", "Unacknowledged DATA chunks.", INT),
    ),
    labels=(
        label("id", "id"),
        label("transportId", "transport_id"),
    ),
)

CANDIDATE_PAIR = _projection(
    "candidate-pair",
    "candidate_pair",
    fields=(
        flag("nominated", "nominated", "Whether the pair has been nominated."),
        counter("packetsSent", "packets_sent_total", "Packets sent on the pair."),
        counter("packetsReceived", "packets_received_total", "Packets received on the pair."),
        counter("bytesSent", "bytes_sent_total", "Payload bytes sent on the pair."),
        counter("bytesReceived", "bytes_received_total", "Payload bytes received on the pair."),
        gauge("lastPacketSentTimestamp", "last_packet_sent_timestamp", "Timestamp of the last packet sent."),
        gauge("lastPacketReceivedTimestamp", "last_packet_received_timestamp", "Timestamp of the last packet received."),
        gauge("firstRequestTimestamp", "first_request_timestamp", "Timestamp of the first STUN request."),
        gauge("lastRequestTimestamp", "last_request_timestamp", "Timestamp of the last STUN request."),
        gauge("lastResponseTimestamp", "last_response_timestamp", "Timestamp of the last STUN response."),
        counter("totalRoundTripTime", "round_trip_time_seconds_total", "Sum of STUN round trip times.", FLOAT),
        gauge("currentRoundTripTime", "current_round_trip_time_seconds", "Latest STUN round trip time."),
        gauge("availableOutgoingBitrate", "available_outgoing_bitrate_bps", "Estimated available outgoing bitrate."),
        gauge("availableIncomingBitrate", "available_incoming_bitrate_bps", "Estimated available incoming bitrate."),
        counter("circuitBreakerTriggerCount", "circuit_breaker_trigger_count_total", "Circuit breaker triggers."),
        counter("requestsReceived", "requests_received_total", "Connectivity check requests received."),
        counter("requestsSent", "requests_sent_total", "Connectivity check requests sent."),
        counter("responsesReceived", "responses_received_total", "Connectivity check responses received."),
        counter("responsesSent", "responses_sent_total", "Connectivity check responses sent."),
        counter("retransmissionsReceived", "retransmissions_received_total", "Connectivity check retransmissions received."),
        counter("retransmissionsSent", "retransmissions_sent_total", "Connectivity check retransmissions sent."),
        counter("consentRequestsSent", "consent_requests_sent_total", "Consent requests sent."),
        gauge("consentExpiredTimestamp", "consent_expired_timestamp", "Timestamp at which consent expired."),
        counter("packetsDiscardedOnSend", "packets_discarded_on_send_total", "Packets discarded due to socket errors."),
        counter("bytesDiscardedOnSend", "bytes_discarded_on_send_total", "Bytes discarded due to socket errors."),
        counter("requestBytesSent", "request_bytes_sent_total", "Bytes sent in connectivity checks."),
        counter("consentRequestBytesSent", "consent_request_bytes_sent_total", "Bytes sent in consent requests."),
        counter("responseBytesSent", "response_bytes_sent_total", "Bytes sent in connectivity check responses."),
    ),
    labels=(
        label("id", "id"),
        label("transportId", "transport_id"),
        label("localCandidateId", "local_candidate_id"),
        label("remoteCandidateId", "remote_candidate_id"),
    ),
)

_CANDIDATE_LABELS = (
    label("id", "id"),
    label("transportId", "transport_id"),
    label("address", "address"),
    label("port", "port", INT),
    label("protocol", "protocol"),
    label("candidateType", "candidate_type"),
)

LOCAL_CANDIDATE = _projection(
    "local-candidate",
    "local_candidate",
    fields=(gauge("priority", "priority", "ICE priority of the candidate.", INT),),
    labels=_CANDIDATE_LABELS,
)

REMOTE_CANDIDATE = _projection(
    "remote-candidate",
    "remote_candidate",
    fields=(gauge("priority", "priority", "ICE priority of the candidate.", INT),),
    labels=_CANDIDATE_LABELS,
)

# Certificates carry no numeric fields; registered so they are recognised.
CERTIFICATE = _projection(
    "certificate",
    "certificate",
    fields=(),
    labels=(
        label("id", "id"),
        label("fingerprintAlgorithm", "fingerprint_algorithm"),
    ),
)

ICE_SERVER = _projection(
    "ice-server",
    "ice_server",
    fields=(
        counter("totalRequestsSent", "requests_sent_total", "Requests sent to the server."),
        counter("totalResponsesReceived", "responses_received_total", "Responses received from the server."),
        counter("totalRoundTripTime", "round_trip_time_seconds_total", "Sum of request round trip times.", FLOAT),
    ),
    labels=(
        label("id", "id"),
        label("url", "url"),
        label("port", "port", INT),
        label("relayProtocol", "relay_protocol"),
    ),
)

PROJECTIONS: tuple[ReportProjection, ...] = (
    CODEC,
    OUTBOUND_RTP,
    INBOUND_RTP,
    REMOTE_OUTBOUND_RTP,
    REMOTE_INBOUND_RTP,
    MEDIA_SOURCE,
    PEER_CONNECTION,
    DATA_CHANNEL,
    TRANSPORT,
    SCTP_TRANSPORT,
    CANDIDATE_PAIR,
    LOCAL_CANDIDATE,
    REMOTE_CANDIDATE,
    CERTIFICATE,
    ICE_SERVER,
)
