import numpy as np
from scipy import ndimage


def cfar_2d(
    power_map: np.ndarray,
    guard_cells=(1, 1),
    training_cells=(4, 4),
    pfa=1e-3
) -> np.ndarray:
    """
    2D Cell-Averaging CFAR detector.

    Parameters:
        power_map: 2D power map (range x Doppler)
        guard_cells: (g_r, g_d)
        training_cells: (t_r, t_d)
        pfa: Probability of false alarm

    Returns:
        detections: Boolean array same shape as power_map. Cells whose
                    training window would leave the map are never detected.
    """
    g_r, g_d = guard_cells
    t_r, t_d = training_cells
    half_r, half_d = t_r + g_r, t_d + g_d

    # Training ring: full window minus guard cells and the CUT
    kernel = np.ones((2 * half_r + 1, 2 * half_d + 1))
    kernel[t_r:t_r + 2 * g_r + 1, t_d:t_d + 2 * g_d + 1] = 0
    num_train = int(kernel.sum())

    # CA-CFAR threshold scaling factor
    alpha = num_train * (pfa ** (-1 / num_train) - 1)

    noise_level = ndimage.correlate(power_map.astype(float), kernel, mode="constant") / num_train
    detections = power_map > alpha * noise_level

    valid = np.zeros_like(detections)
    valid[half_r:power_map.shape[0] - half_r, half_d:power_map.shape[1] - half_d] = True
    return detections & valid


def suppress_to_local_max(detections: np.ndarray,
                          power_map: np.ndarray) -> np.ndarray:
    """
    Reduce each connected cluster of detections to its strongest cell.
    """
    labeled_array, num_features = ndimage.label(detections)
    pruned = np.zeros_like(detections, dtype=bool)
    if num_features == 0:
        return pruned

    peaks = ndimage.maximum_position(power_map, labeled_array, index=np.arange(1, num_features + 1))
    for peak in peaks:
        pruned[peak] = True
    return pruned
