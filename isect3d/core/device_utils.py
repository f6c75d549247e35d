"""
Device and tensor utilities for Isect3D

Device resolution for the batched queries.
Priority: explicit device arg > input tensors > default ('cuda' or 'cpu')
"""

from typing import Optional, Union
import numpy as np
import torch


def resolve_device(
    *tensors: Optional[torch.Tensor],
    device: Optional[Union[str, torch.device]] = None,
    default: str = 'cuda'
) -> torch.device:
    """
    Resolve device with priority: explicit device > input tensors > default.

    Args:
        *tensors: Input tensors to infer device from (first tensor wins)
        device: Explicitly specified device (overrides tensor inference if not None)
        default: Default device if no tensors and no explicit device

    Returns:
        torch.device: Resolved device

    Examples:
        >>> t = torch.randn(4, 3, 3, device='cuda:1')
        >>> resolve_device(t)  # device('cuda:1')
        >>> resolve_device(t, device='cpu')  # device('cpu')
        >>> resolve_device(None)  # device('cuda') or device('cpu')
    """
    if device is not None:
        if isinstance(device, torch.device):
            return device
        return torch.device(device)

    for tensor in tensors:
        if isinstance(tensor, torch.Tensor):
            return tensor.device

    if default == 'cuda' and not torch.cuda.is_available():
        return torch.device('cpu')

    return torch.device(default)


def as_triangles(
    tris: Union[torch.Tensor, np.ndarray],
    device: torch.device,
    name: str = "tris"
) -> torch.Tensor:
    """
    Convert a triangle batch to a float64 tensor on `device`.

    Args:
        tris: [N, 3, 3] triangle vertices (tensor, array or nested lists)
        device: target device
        name: argument name used in error messages

    Returns:
        tris: [N, 3, 3] float64

    Raises:
        ValueError: if the shape is not [N, 3, 3]
    """
    if not isinstance(tris, torch.Tensor):
        tris = torch.as_tensor(np.asarray(tris, dtype=np.float64))
    if tris.dim() != 3 or tris.shape[1:] != (3, 3):
        raise ValueError(f"{name} shape {tuple(tris.shape)} != (N, 3, 3)")
    return tris.to(device=device, dtype=torch.float64)
