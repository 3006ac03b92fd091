"""
Component stub and input hook payloads

Both are string.Template bodies; every component stub has the same shape
with only its name substituted.
"""
from string import Template


COMPONENT_STUB = Template("""import React from 'react'
import { RigidBody } from '@react-three/rapier'

interface ${component_name}Props {
  position?: [number, number, number]
}

const ${component_name}: React.FC<${component_name}Props> = ({ position = [0, 0, 0] }) => {
  return (
    <RigidBody position={position}>
      <mesh castShadow receiveShadow>
        <boxGeometry args={[1, 1, 1]} />
        <meshStandardMaterial color="hotpink" />
      </mesh>
    </RigidBody>
  )
}

export default ${component_name}""")


# Keyboard state tracker: WASD / arrow keys and space
INPUT_HOOK = Template("""import { useEffect, useState } from 'react'

export const ${hook_name} = () => {
  const [keys, setKeys] = useState({
    forward: false,
    backward: false,
    left: false,
    right: false,
    jump: false,
  })

  useEffect(() => {
    const handleKeyDown = (e: KeyboardEvent) => {
      switch (e.key.toLowerCase()) {
        case 'w':
        case 'arrowup':
          setKeys(prev => ({ ...prev, forward: true }))
          break
        case 's':
        case 'arrowdown':
          setKeys(prev => ({ ...prev, backward: true }))
          break
        case 'a':
        case 'arrowleft':
          setKeys(prev => ({ ...prev, left: true }))
          break
        case 'd':
        case 'arrowright':
          setKeys(prev => ({ ...prev, right: true }))
          break
        case ' ':
          setKeys(prev => ({ ...prev, jump: true }))
          break
      }
    }

    const handleKeyUp = (e: KeyboardEvent) => {
      switch (e.key.toLowerCase()) {
        case 'w':
        case 'arrowup':
          setKeys(prev => ({ ...prev, forward: false }))
          break
        case 's':
        case 'arrowdown':
          setKeys(prev => ({ ...prev, backward: false }))
          break
        case 'a':
        case 'arrowleft':
          setKeys(prev => ({ ...prev, left: false }))
          break
        case 'd':
        case 'arrowright':
          setKeys(prev => ({ ...prev, right: false }))
          break
        case ' ':
          setKeys(prev => ({ ...prev, jump: false }))
          break
      }
    }

    window.addEventListener('keydown', handleKeyDown)
    window.addEventListener('keyup', handleKeyUp)

    return () => {
      window.removeEventListener('keydown', handleKeyDown)
      window.removeEventListener('keyup', handleKeyUp)
    }
  }, [])

  return keys
}""")


def render_component(component_name: str) -> str:
    """Stub body for one component"""
    return COMPONENT_STUB.substitute(component_name=component_name)


def render_input_hook(hook_name: str) -> str:
    """Keyboard hook body exported under `hook_name`"""
    return INPUT_HOOK.substitute(hook_name=hook_name)
