# project
from swapstats.families import LABEL_DEVICE, LABEL_DIRECTION, LABEL_STATE

NAN = float('nan')


def percentage(part, total):
    # a zero total is reported as NaN ("unknown") rather than dropped
    if total == 0:
        return NAN
    return 100.0 * part / total


def submit_usage(families, reading, config):
    """
    Append the usage and utilization gauges of one reading.
    Produces nothing when neither absolute nor percentage values are enabled.
    """
    labels = {}
    if reading.device is not None:
        labels[LABEL_DEVICE] = reading.device

    states = reading.states()

    if config.values_absolute:
        for state, value in states:
            families.usage.append(dict(labels, **{LABEL_STATE: state}), float(value))

    if config.values_percentage:
        total = reading.total
        for state, value in states:
            families.utilization.append(dict(labels, **{LABEL_STATE: state}), percentage(value, total))


def submit_io(families, activity, config, page_size):
    """
    Append the paging in/out counters, as page counts or, with report_bytes, as bytes.
    """
    if not config.report_io or activity is None:
        return

    family = families.operations
    swapped_in = int(activity.swapped_in)
    swapped_out = int(activity.swapped_out)
    if config.report_bytes:
        family = families.io
        swapped_in *= page_size
        swapped_out *= page_size

    family.append({LABEL_DIRECTION: 'in'}, swapped_in)
    family.append({LABEL_DIRECTION: 'out'}, swapped_out)
